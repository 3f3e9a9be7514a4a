"""
Validação de um único span candidato contra o texto.

Um span vem da busca exata (externa) como (start_pos, length) em posições de
caractere. Ele só vira match se for palavra inteira: os vizinhos imediatos
precisam ser delimitadores, e o início/fim do texto contam como fronteira.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from .boundaries import leading_ok, trailing_ok

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """Span semiaberto [start_pos, start_pos + length) sobre o texto."""

    start_pos: int
    length: int

    @property
    def end_pos(self) -> int:
        return self.start_pos + self.length


@dataclass(frozen=True)
class Matched:
    text: str


@dataclass(frozen=True)
class Rejected:
    pass


MatchOutcome = Union[Matched, Rejected]
REJECTED = Rejected()


def extract(candidate: Candidate, text: str) -> MatchOutcome:
    """
    Decide se o candidato é ocorrência de palavra inteira e extrai o trecho.
    Spans vazios ou fora do texto são rejeitados, nunca levantam erro.
    """
    text_len = len(text)
    start_pos = candidate.start_pos
    end_pos = candidate.end_pos

    if candidate.length <= 0 or start_pos < 0 or end_pos > text_len:
        log.debug("Span fora do texto ou vazio: %s (len=%d)", candidate, text_len)
        return REJECTED

    if start_pos == 0 and end_pos == text_len:
        accepted = True
    elif start_pos == 0:
        accepted = trailing_ok(end_pos, text)
    elif end_pos == text_len:
        accepted = leading_ok(start_pos, text)
    else:
        accepted = leading_ok(start_pos, text) and trailing_ok(end_pos, text)

    if not accepted:
        log.debug("Span %s rejeitado: vizinho não é delimitador.", candidate)
        return REJECTED
    return Matched(text[start_pos:end_pos])


def find_match(start_pos: int, length: int, text: str) -> MatchOutcome:
    """Atalho para extract() a partir de inteiros soltos."""
    return extract(Candidate(start_pos, length), text)
