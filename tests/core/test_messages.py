"""Tests for the message envelope."""

import json
from datetime import datetime, timezone

import pytest

from stamp_health.core.messages import Message


def test_message_timestamp_defaults_to_now():
    message = Message(action="AddComment", payload={})
    assert message.timestamp.tzinfo is timezone.utc


def test_message_immutable():
    message = Message(action="AddComment", payload={})
    with pytest.raises(AttributeError):
        message.action = "Other"  # type: ignore


def test_to_json():
    message = Message(
        action="AddRating",
        payload={"rating": 5},
        timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )
    assert json.loads(message.to_json()) == {
        "action": "AddRating",
        "payload": {"rating": 5},
        "timestamp": "2024-05-01T00:00:00+00:00",
    }
