"""Client identification from API Gateway events."""

import os

# Header set by the edge proxy with the real client address
CLIENT_IP_HEADER = os.environ.get("CLIENT_IP_HEADER", "CF-Connecting-IP")


def _lower_headers(event: dict) -> dict[str, str]:
    headers = event.get("headers", {}) or {}
    return {str(k).lower(): v for k, v in headers.items() if v}


def get_client_ip(event: dict, trusted_header: str | None = None) -> str:
    """Extract client IP from API Gateway event.

    Checks the trusted proxy header first, then the first entry of
    X-Forwarded-For, then the API Gateway source IP.

    Args:
        event: API Gateway event dict.
        trusted_header: Proxy header to trust. Defaults to CLIENT_IP_HEADER.

    Returns:
        Client IP address string, or "unknown".
    """
    headers = _lower_headers(event)
    request_context = event.get("requestContext", {}) or {}
    identity = request_context.get("identity", {}) or {}

    trusted = (trusted_header or CLIENT_IP_HEADER).lower()
    if headers.get(trusted, "").strip():
        return headers[trusted].strip()

    forwarded_for = headers.get("x-forwarded-for")
    if forwarded_for:
        # Take the first IP (original client)
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    return identity.get("sourceIp") or "unknown"


def get_user_agent(event: dict) -> str | None:
    """Get the User-Agent header, if any."""
    return _lower_headers(event).get("user-agent")


def get_origin(event: dict) -> str | None:
    """Get the Origin header, if any."""
    return _lower_headers(event).get("origin")
