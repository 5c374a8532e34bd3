import re
from datetime import UTC, datetime

_TURKISH_FOLD = str.maketrans({"ğ": "g", "ü": "u", "ş": "s", "ı": "i", "ö": "o", "ç": "c"})


def now() -> datetime:
    return datetime.now(UTC)


def slugify(text: str) -> str:
    """Build a URL-friendly slug, folding Turkish letters to ASCII.

    >>> slugify("Galatasaray Forması 2024")
    'galatasaray-formasi-2024'
    """
    slug = text.lower().translate(_TURKISH_FOLD)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w-]+", "", slug, flags=re.ASCII)
    slug = re.sub(r"--+", "-", slug)
    return slug.strip("-")
