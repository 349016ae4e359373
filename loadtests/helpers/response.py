"""Response error extraction for load test observability.

Turns Bookstore API error responses into one-line messages.
Two body shapes come back:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Ordering errors (400/404/500): {"error": {"field": ["msg", ...]}} or {"error": "msg"}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def _join(messages) -> str:
    if isinstance(messages, list):
        return "; ".join(str(m) for m in messages)
    return str(messages)


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and isinstance(body.get("detail"), list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    if isinstance(body, dict) and "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(f"{field}: {_join(messages)}" for field, messages in error.items())
        return str(error)

    return str(body)[:300]


def is_stock_refusal(response: Response) -> bool:
    """True for a 400 caused by short stock, an expected outcome under load."""
    if response.status_code != 400:
        return False
    try:
        error = response.json().get("error")
    except ValueError:
        return False
    return isinstance(error, dict) and "quantity" in error
