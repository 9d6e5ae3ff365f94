from slugify import slugify as _slugify


def slugify(text: str) -> str:
    """URL slug for a catalogue name: transliterated, lower-case, ``-`` separated."""
    return _slugify((text or "").strip(), lowercase=True)
