import re

PLACEHOLDER_MARKERS = ("***", "YOUR_TOKEN", "PLACEHOLDER")
MIN_TOKEN_LENGTH = 11
_TOKEN_RE = re.compile(r"[A-Za-z0-9_-]+")


def validate_oauth_token(token: str) -> bool:
    """Return True when `token` looks like a real API token rather than a template value."""
    if not token or not token.strip():
        return False
    if any(marker in token for marker in PLACEHOLDER_MARKERS):
        return False
    return bool(_TOKEN_RE.fullmatch(token)) and len(token) >= MIN_TOKEN_LENGTH
