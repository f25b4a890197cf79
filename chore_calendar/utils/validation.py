import re
from typing import Optional

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trimmed value, or None when missing or blank."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def is_blank(value: Optional[str]) -> bool:
    return clean_text(value) is None


def is_hex_color(value: str) -> bool:
    return bool(HEX_COLOR.match(value))
