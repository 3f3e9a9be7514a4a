"""
Processamento em lote de spans candidatos.

Cada candidato é avaliado de forma independente por `extract`; a saída mantém a
ordem de entrada mesmo quando o lote é dividido entre threads.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Literal

from .spans import Candidate, Matched, MatchOutcome, extract

BatchPolicy = Literal["filtered", "unfiltered"]
BATCH_POLICIES: tuple[str, ...] = ("filtered", "unfiltered")
DEFAULT_BATCH_POLICY: BatchPolicy = "unfiltered"
DEFAULT_PARALLEL_MIN_BATCH = 64

log = logging.getLogger(__name__)


class MalformedCandidateError(ValueError):
    """Candidato que não pode ser lido como par (start_pos, length); aborta o lote inteiro."""

    def __init__(self, index: int, raw: Any, reason: str) -> None:
        self.index = index
        self.raw = raw
        self.reason = reason
        if index < 0:
            super().__init__(f"Lote inválido ({reason}): {raw!r}")
        else:
            super().__init__(f"Candidato #{index} inválido ({reason}): {raw!r}")


def _as_position(value: Any) -> int | None:
    # bool é subclasse de int, mas nunca é uma posição válida
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < 0:
        return None
    return value


def decode_candidate(raw: Any, index: int = 0) -> Candidate:
    """
    Converte um valor vindo do chamador em Candidate.
    Aceita Candidate, par (start_pos, length) em tupla/lista ou dict com essas chaves.
    """
    if isinstance(raw, Candidate):
        start, length = raw.start_pos, raw.length
    elif isinstance(raw, Mapping):
        if "start_pos" not in raw or "length" not in raw:
            raise MalformedCandidateError(index, raw, "faltam chaves start_pos/length")
        start, length = raw["start_pos"], raw["length"]
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes, bytearray)):
        if len(raw) != 2:
            raise MalformedCandidateError(index, raw, f"esperado par, recebido {len(raw)} itens")
        start, length = raw[0], raw[1]
    else:
        raise MalformedCandidateError(index, raw, f"tipo não suportado: {type(raw).__name__}")

    start_pos = _as_position(start)
    if start_pos is None:
        raise MalformedCandidateError(index, raw, "start_pos deve ser inteiro não negativo")
    match_length = _as_position(length)
    if match_length is None:
        raise MalformedCandidateError(index, raw, "length deve ser inteiro não negativo")
    return Candidate(start_pos, match_length)


def decode_candidates(raw_candidates: Iterable[Any]) -> List[Candidate]:
    """Decodifica todos os candidatos antes de qualquer extração (tudo ou nada)."""
    if isinstance(raw_candidates, (str, bytes, bytearray, Mapping)) or not isinstance(raw_candidates, Iterable):
        raise MalformedCandidateError(-1, raw_candidates, "lote deve ser uma sequência de pares")
    return [decode_candidate(raw, idx) for idx, raw in enumerate(raw_candidates)]


def match_outcomes(
    candidates: Iterable[Any],
    text: str,
    parallel_workers: int = 1,
    parallel_min_batch: int = DEFAULT_PARALLEL_MIN_BATCH,
) -> List[MatchOutcome]:
    """
    Aplica extract() a cada candidato e devolve os resultados na ordem de entrada.
    Com parallel_workers > 1 e lote grande o bastante, divide o trabalho em threads
    e remonta pelo índice original.
    """
    decoded = decode_candidates(candidates)
    total = len(decoded)
    if parallel_workers <= 1 or total < max(parallel_min_batch, 2):
        return [extract(cand, text) for cand in decoded]

    workers = min(parallel_workers, total)
    log.debug("Lote de %d candidatos dividido em %d workers.", total, workers)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # futures ficam na ordem de entrada; a ordem de conclusão não importa
        futures = [executor.submit(extract, cand, text) for cand in decoded]
        return [future.result() for future in futures]


def check_policy(policy: Any) -> None:
    """Levanta ValueError se a política de lote não for conhecida."""
    if policy not in BATCH_POLICIES:
        raise ValueError(f"Política de lote desconhecida: {policy!r} (use {', '.join(BATCH_POLICIES)})")


def apply_policy(outcomes: Sequence[MatchOutcome], policy: str) -> List[str]:
    """Converte resultados tagueados em textos segundo a política de rejeição."""
    check_policy(policy)
    if policy == "filtered":
        return [o.text for o in outcomes if isinstance(o, Matched)]
    return [o.text if isinstance(o, Matched) else "" for o in outcomes]


def match_all(
    candidates: Iterable[Any],
    text: str,
    policy: str = DEFAULT_BATCH_POLICY,
    parallel_workers: int = 1,
    parallel_min_batch: int = DEFAULT_PARALLEL_MIN_BATCH,
) -> List[str]:
    """
    Valida um lote de spans e devolve os textos casados na ordem de entrada.

    policy="filtered" descarta rejeições; policy="unfiltered" coloca "" no lugar de
    cada rejeição, mantendo correspondência 1:1 com a entrada.
    Levanta MalformedCandidateError se qualquer candidato for ilegível.
    """
    check_policy(policy)
    outcomes = match_outcomes(
        candidates,
        text,
        parallel_workers=parallel_workers,
        parallel_min_batch=parallel_min_batch,
    )
    matched = sum(1 for o in outcomes if isinstance(o, Matched))
    log.debug("Lote: %d/%d candidatos casaram (política=%s).", matched, len(outcomes), policy)
    return apply_policy(outcomes, policy)
