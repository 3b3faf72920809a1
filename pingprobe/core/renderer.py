"""Render a classification into an uncacheable plain-text response."""

from typing import Optional

from pingprobe.core.types import Classification, ResponseSpec

CACHE_CONTROL = "must-revalidate, no-store"
CONTENT_TYPE = "text/plain; charset=utf-8"
EXPIRES = "0"

HTTP_1_0 = "1.0"


def normalize_protocol_version(protocol_version: Optional[str]) -> Optional[str]:
    """Reduce ``"HTTP/1.0"`` style values to the bare version (``"1.0"``)."""
    if protocol_version is None:
        return None
    value = protocol_version.strip()
    if value.upper().startswith("HTTP/"):
        value = value[len("HTTP/"):]
    return value or None


def render(
    classification: Classification,
    protocol_version: Optional[str] = None,
    expires_http10_only: bool = False,
) -> ResponseSpec:
    """Build the response for a classification.

    Args:
        classification: Status and body to send.
        protocol_version: Protocol version declared by the client, either
            bare (``"1.1"``) or prefixed (``"HTTP/1.1"``).
        expires_http10_only: Only send ``Expires: 0`` to HTTP/1.0 clients.
            Off by default, in which case it is always sent.

    Returns:
        ResponseSpec: The rendered response. Pure; nothing is logged.
    """
    headers = {
        "Cache-Control": CACHE_CONTROL,
        "Content-Type": CONTENT_TYPE,
    }

    if not expires_http10_only or normalize_protocol_version(protocol_version) == HTTP_1_0:
        headers["Expires"] = EXPIRES

    return ResponseSpec(
        status_code=classification.status_code,
        body=classification.body,
        headers=headers,
        requires_expires_override="Expires" in headers,
    )
