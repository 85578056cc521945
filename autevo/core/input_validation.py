# autevo/core/input_validation.py
"""
Input sanitization for free-text fields.
Prevents stored markup in names, notes and descriptions.
"""

import re
from typing import Annotated, Optional

import bleach
from pydantic import AfterValidator

HEX_COLOR_PATTERN = re.compile(r'^#[0-9A-Fa-f]{6}$')
SCRIPT_STYLE_PATTERN = re.compile(r'<(script|style)\b[^>]*>.*?</\1\s*>', re.IGNORECASE | re.DOTALL)


def sanitize_text(value: str) -> str:
    """Strip HTML tags and null bytes, trim whitespace"""
    clean = SCRIPT_STYLE_PATTERN.sub('', value.replace('\x00', ''))
    clean = bleach.clean(clean, tags=[], attributes={}, strip=True)
    # bleach escapes what it keeps; stored values are plain text
    clean = (
        clean.replace('&lt;', '')
        .replace('&gt;', '')
        .replace('&amp;', '&')
        .replace('&quot;', '"')
        .replace('&#x27;', "'")
    )
    return clean.strip()


def normalize_plate(plate: str) -> str:
    """License plates are stored upper-case without surrounding whitespace"""
    return plate.strip().upper()


def empty_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


# Usage in Pydantic models
SecureString = Annotated[str, AfterValidator(sanitize_text)]
