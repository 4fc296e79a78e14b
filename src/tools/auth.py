import hmac

BEARER_PREFIX = "Bearer "


def is_authorized(authorization_header: str | None, expected_token: str | None) -> bool:
    """Check a bearer token. With no expected token configured, every caller is allowed."""
    if not expected_token:
        return True

    header = authorization_header or ""
    token = header[len(BEARER_PREFIX) :] if header.startswith(BEARER_PREFIX) else ""
    return bool(token) and hmac.compare_digest(token, expected_token)
