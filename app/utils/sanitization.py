import re

_TAG_RE = re.compile(r'<[^>]*>')


def sanitize_string(v: str) -> str:
    if not isinstance(v, str):
        return v
    # 1. Strip HTML tags
    v = _TAG_RE.sub('', v)
    # 2. Trim whitespace
    return v.strip()


def normalize_email(v: str) -> str:
    """Emails are stored and looked up lower-cased."""
    if not isinstance(v, str):
        return v
    return v.strip().lower()
