"""Response error extraction for load test observability.

Parses catalogue API error responses into human-readable messages.
Handles two response shapes:

- Catalogue errors (400/404/503): {"kind": "...", "error": {"field": ["msg", ...]}}
- Framework errors (401/403): {"detail": "msg"}
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
    except ValueError:
        # Not JSON: return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    if "error" in body:
        kind = body.get("kind", "Error")
        error = body["error"]
        if isinstance(error, dict):
            details = " | ".join(
                f"{field}: {'; '.join(map(str, messages)) if isinstance(messages, list) else messages}"
                for field, messages in error.items()
            )
            return f"{kind}: {details}"
        return f"{kind}: {error}"

    if "detail" in body:
        return str(body["detail"])

    # Unknown shape: stringify and truncate
    return str(body)[:300]
