"""Channel adapter registry: pluggable notification dispatch channels.

Provides singleton access to channel adapters. Uses fake adapters by
default; real adapters (an SMTP relay, a websocket gateway) are selected
through EMAIL_ADAPTER / PUSH_ADAPTER in production.
"""

import os

from notifications.types import NotificationChannel

_channel_instances: dict[str, object] = {}

_ADAPTER_ENV = {
    NotificationChannel.EMAIL.value: "EMAIL_ADAPTER",
    NotificationChannel.PUSH.value: "PUSH_ADAPTER",
}


def get_channel(channel_type: str):
    """Return the configured channel adapter (singleton per channel type).

    Args:
        channel_type: One of NotificationChannel enum values ("Email", "Push")
    """
    if channel_type not in _channel_instances:
        if channel_type not in _ADAPTER_ENV:
            raise ValueError(f"Unknown channel type: {channel_type}")

        adapter = os.environ.get(_ADAPTER_ENV[channel_type], "fake")
        if adapter != "fake":
            raise ValueError(f"Unknown {channel_type} adapter: {adapter}")

        if channel_type == NotificationChannel.EMAIL.value:
            from notifications.channel.fake_email import FakeEmailAdapter

            _channel_instances[channel_type] = FakeEmailAdapter()
        else:
            from notifications.channel.fake_push import FakePushAdapter

            _channel_instances[channel_type] = FakePushAdapter()

    return _channel_instances[channel_type]


def reset_channels():
    """Reset all channel singletons (useful for testing)."""
    _channel_instances.clear()
