from __future__ import annotations

from .delimiters import is_delimiter


def leading_ok(start_pos: int, text: str) -> bool:
    """
    Verifica o caractere imediatamente antes do span.
    Só vale para start_pos > 0; o início do texto já é fronteira e não passa por aqui.
    """
    if start_pos <= 0:
        raise ValueError(f"leading_ok exige start_pos > 0 (recebido {start_pos})")
    return is_delimiter(text[start_pos - 1])


def trailing_ok(end_pos: int, text: str) -> bool:
    """
    Verifica o caractere na posição end_pos (primeiro depois do span).
    Só vale para end_pos < len(text); o fim do texto já é fronteira.
    """
    if end_pos >= len(text):
        raise ValueError(f"trailing_ok exige end_pos < {len(text)} (recebido {end_pos})")
    return is_delimiter(text[end_pos])
