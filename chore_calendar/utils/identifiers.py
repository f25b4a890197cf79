import re
import uuid

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase, dash separated form of a display name."""
    slug = _NON_SLUG.sub("-", text.strip().lower()).strip("-")
    return slug or "item"


def generate_id(name: str) -> str:
    """Readable slug plus a random suffix, e.g. ``smith-family-3f9a2c1b7d4e``."""
    return f"{slugify(name)}-{uuid.uuid4().hex[:12]}"
