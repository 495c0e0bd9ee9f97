"""Identifier and display-name helpers."""

import uuid


def generate_id() -> str:
    """Return a new opaque unique identifier."""
    return uuid.uuid4().hex


def get_initials(name: str) -> str:
    """Derive display initials from a name.

    Takes the first letter of each whitespace-separated word, uppercased,
    and keeps at most two of them.

    Examples:
        "john smith" -> "JS"
        "madonna" -> "M"
        "Mary Ann Lee" -> "MA"
    """
    return "".join(word[0].upper() for word in name.split())[:2]
