"""
Conjunto fixo de caracteres aceitos como fronteira de palavra.
"""

from __future__ import annotations

DELIMITERS: frozenset[str] = frozenset(
    [
        " ", ".", ",", "!", "?", "#", "$", "%", "^", "&", "@",
        "(", ")", ">", "<", "/", "\\", "|", "[", "]", "{", "}",
        "~", "*", "-", "_", "+", "=", ":", ";", '"', "'", "`",
    ]
)


def is_delimiter(ch: str) -> bool:
    """True se `ch` (um único caractere) marca fronteira de palavra."""
    return ch in DELIMITERS
