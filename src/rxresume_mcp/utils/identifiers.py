import re
import secrets
import string

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 24


def generate_item_id() -> str:
    """Return a cuid2-compatible id: 24 lowercase alphanumeric characters."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def slugify_title(title: str) -> str:
    """Lower-case ``title`` and replace each run of whitespace with a hyphen."""
    return re.sub(r"\s+", "-", title.lower())
