"""URL redaction for request logging."""

import re

# Query parameters whose values never reach the logs
SENSITIVE_PARAMS = [
    "appid",
    "api_key",
    "apikey",
    "token",
    "access_token",
    "secret",
    "password",
]

_SENSITIVE_PATTERN = re.compile(rf"(?i)\b({'|'.join(SENSITIVE_PARAMS)})=([^&\s\"]+)")


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from URL."""
    return _SENSITIVE_PATTERN.sub(r"\1=***REDACTED***", url)
