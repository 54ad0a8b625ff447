"""Response error extraction for load test observability.

Parses Harvestlane API error responses into human-readable messages.
Handles two response shapes:

- Gateway rejections (401): {"detail": "Missing X-User-Id header"}
- Ordering errors (400/403/404/409/500): {"error": "msg"} or {"error": {"field": [msgs]}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except Exception:
        # Not JSON, return raw text truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    # HTTPException raised by the principal dependency
    if "detail" in body:
        return str(body["detail"])

    # {"error": "msg"}, {"error": {"field": ["msg"]}} or the stock shortfall body
    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            if "message" in error:
                return str(error["message"])
            return " | ".join(f"{k}: {', '.join(v) if isinstance(v, list) else v}" for k, v in error.items())
        return str(error)

    # Unknown shape
    return str(body)[:300]
