"""File name derivation for generated modules."""

import re

_ROLE_WORDS = re.compile(r"component|system", re.IGNORECASE)

# Boundary before an upper-case word; an acronym run ("AI", "HTTP") is one word.
_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def derive_filename(name: str, ext: str = ".js") -> str:
    """
    Map a declared class name to its module file name.

    >>> derive_filename("PlayerHealthComponent")
    'player-health.js'
    >>> derive_filename("EnemyAISystem")
    'enemy-ai.js'
    """
    stem = _ROLE_WORDS.sub("", name) or name
    stem = stem.replace("2D", "2d").replace("3D", "3d")
    stem = _WORD_BOUNDARY.sub("-", stem)
    return stem.lower() + ext


__all__ = ["derive_filename"]
