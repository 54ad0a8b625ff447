"""Best-effort dispatch of rendered notifications via channel adapters.

Delivery never raises: adapter exceptions and failed deliveries are logged
and reported in the returned results, so callers can fire and forget.
"""

import structlog

from notifications.channel import get_channel
from notifications.templates import get_template
from notifications.types import NotificationChannel

logger = structlog.get_logger(__name__)


def _deliver(channel: str, send, **log_context) -> dict:
    try:
        result = send(get_channel(channel))
    except Exception as exc:
        logger.exception("Notification delivery raised", channel=channel, **log_context)
        return {"channel": channel, "status": "failed", "error": str(exc)}

    if result.get("status") != "sent":
        logger.warning(
            "Notification delivery failed",
            channel=channel,
            error=result.get("error"),
            **log_context,
        )
    return {"channel": channel, **result}


def dispatch(notification_type: str, context: dict, email_to: str | None = None, room: str | None = None) -> list:
    """Render ``notification_type`` from ``context`` and send it on its default channels.

    Email goes to ``email_to`` and real-time pushes to ``room``; a channel
    without an address is skipped.
    """
    template = get_template(notification_type)
    content = template.render(context)
    log_context = {"notification_type": notification_type, "room": room}

    results = []
    for channel in template.default_channels:
        if channel == NotificationChannel.EMAIL.value and email_to:
            results.append(
                _deliver(
                    channel,
                    lambda adapter: adapter.send(
                        to=email_to,
                        subject=content["subject"],
                        body=content["body"],
                        tags=[template.event_name],
                    ),
                    **log_context,
                )
            )
        elif channel == NotificationChannel.PUSH.value and room:
            results.append(
                _deliver(
                    channel,
                    lambda adapter: adapter.send(
                        room=room,
                        event=template.event_name,
                        title=content["subject"],
                        body=content["body"],
                        data=context,
                    ),
                    **log_context,
                )
            )
    return results
