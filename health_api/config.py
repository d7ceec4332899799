"""Health API configuration."""

from dataclasses import dataclass


@dataclass
class ApiConfig:
    """Configuration for the health API application."""

    title: str = "Stamp Health Service"
    debug: bool = False
