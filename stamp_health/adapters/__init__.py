"""Clients for the dependencies a stamp is probed on."""
