"""
Redaction helpers for anything that ends up in a log line or an exception.

Download hrefs handed out by the API can carry signed query parameters,
hrefs for SDK flows can carry short-lived tokens, and error bodies sometimes
echo request data back. URLs and messages are passed through here before
they are logged or attached to an error.
"""

import re
from urllib.parse import urlparse, urlunparse

REDACTED = "[REDACTED]"

# Lower-cased query parameter names whose values are never logged
SENSITIVE_PARAMS = frozenset({
    # signed storage URLs
    "sig",
    "signature",
    "x-amz-signature",
    "x-amz-credential",
    "x-amz-security-token",
    # API and SDK credentials
    "token",
    "access_token",
    "sdk_token",
    "api_key",
    "apikey",
    "key",
    "auth",
    "authorization",
    "secret",
    "password",
})


def _redact_query(query: str) -> str:
    pairs = []
    for pair in query.split("&"):
        name, sep, _ = pair.partition("=")
        pairs.append(f"{name}={REDACTED}" if sep and name.lower() in SENSITIVE_PARAMS else pair)
    return "&".join(pairs)


def sanitize_url(url: str) -> str:
    """
    Replace the values of credential-bearing query parameters.

    Works on absolute URLs and on relative paths. A URL that cannot be
    parsed is returned unchanged.

    >>> sanitize_url("https://api.onfido.com/v3.6/live_videos?token=abc&page=2")
    'https://api.onfido.com/v3.6/live_videos?token=[REDACTED]&page=2'
    """
    if not url:
        return url
    try:
        parsed = urlparse(url)
    except ValueError:
        return url
    if not parsed.query:
        return url
    return urlunparse(parsed._replace(query=_redact_query(parsed.query)))


# Credential-looking fragments inside free text
_MESSAGE_PATTERNS = [
    (re.compile(r"bearer\s+[a-zA-Z0-9\-_.=]+", re.IGNORECASE), f"bearer {REDACTED}"),
    (re.compile(r'api[_-]?(?:key|token)[=:]\s*[^\s"\'&]+', re.IGNORECASE), f"api_key={REDACTED}"),
    (
        re.compile(r'\b((?:sdk_|access_)?token|sig(?:nature)?|password|secret)=[^&\s"\']+', re.IGNORECASE),
        rf"\1={REDACTED}",
    ),
]

_URL_PATTERN = re.compile(r'https?://[^\s"\'<>]+')


def sanitize_error_message(msg: str, max_length: int = 500) -> str:
    """
    Redact credentials from free text and cap its length.

    Embedded URLs get the same treatment as sanitize_url. Messages longer
    than ``max_length`` are cut and end with "...".
    """
    if not msg:
        return msg

    for pattern, replacement in _MESSAGE_PATTERNS:
        msg = pattern.sub(replacement, msg)
    msg = _URL_PATTERN.sub(lambda m: sanitize_url(m.group(0)), msg)

    if len(msg) > max_length:
        msg = msg[: max_length - 3] + "..."
    return msg
