"""
Fronteira com o processo hospedeiro.

Traduz chamadas genéricas (inteiros, listas, bytes UTF-8) para as operações tipadas
de `spans`/`batch` e devolve respostas no formato (status, result). O núcleo não
conhece nenhum desses status.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple

from .batch import MalformedCandidateError, check_policy, decode_candidate, match_all
from .config import AppConfig, load_config
from .spans import Matched, extract

STATUS_OK = "ok"
STATUS_ERROR = "error"
STATUS_MALFORMED = "malformed_candidate"
STATUS_INVALID_CALL = "invalid_call"

log = logging.getLogger(__name__)

_CONFIG: AppConfig | None = None


class HostResponse(NamedTuple):
    status: str
    result: Any


def set_config(cfg: AppConfig | None) -> None:
    """
    Define a configuração usada quando a chamada não informa política/paralelismo.
    set_config(None) descarta a atual; a próxima chamada relê casador.yaml do diretório corrente.
    """
    global _CONFIG
    _CONFIG = cfg


def _config() -> AppConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


def _decode_text(text: str | bytes) -> str:
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode("utf-8")
    if not isinstance(text, str):
        raise TypeError(f"texto deve ser str ou bytes UTF-8, recebido {type(text).__name__}")
    return text


def ping() -> HostResponse:
    """Sonda de saúde para o hospedeiro."""
    return HostResponse(STATUS_OK, "Success")


def find_matches(start_pos: Any, match_length: Any, text: str | bytes) -> HostResponse:
    """
    Valida um único span. Retorna ("ok", trecho) ou ("error", "") quando não há
    palavra inteira nessa posição.
    """
    try:
        decoded_text = _decode_text(text)
        candidate = decode_candidate((start_pos, match_length))
    except (MalformedCandidateError, UnicodeDecodeError, TypeError) as exc:
        log.warning("Chamada find_matches ilegível: %s", exc)
        return HostResponse(STATUS_MALFORMED, str(exc))

    outcome = extract(candidate, decoded_text)
    if isinstance(outcome, Matched):
        return HostResponse(STATUS_OK, outcome.text)
    return HostResponse(STATUS_ERROR, "")


def find_all_matches(
    spans: Any,
    text: str | bytes,
    policy: str | None = None,
    parallel_workers: int | None = None,
) -> HostResponse:
    """
    Valida um lote de spans. Retorna ("ok", [trechos]) segundo a política configurada,
    ou ("malformed_candidate", motivo) se algum candidato não puder ser lido; nesse
    caso nenhum resultado parcial é devolvido. Política ou paralelismo inválidos
    voltam como ("invalid_call", motivo).
    """
    cfg = _config()
    policy = policy if policy is not None else cfg.batch_policy
    parallel_workers = parallel_workers if parallel_workers is not None else cfg.parallel_workers
    try:
        check_policy(policy)
    except ValueError as exc:
        log.warning("Chamada find_all_matches inválida: %s", exc)
        return HostResponse(STATUS_INVALID_CALL, str(exc))
    if isinstance(parallel_workers, bool) or not isinstance(parallel_workers, int) or parallel_workers < 1:
        reason = f"parallel_workers deve ser inteiro >= 1 (recebido {parallel_workers!r})"
        log.warning("Chamada find_all_matches inválida: %s", reason)
        return HostResponse(STATUS_INVALID_CALL, reason)

    try:
        decoded_text = _decode_text(text)
    except (UnicodeDecodeError, TypeError) as exc:
        log.warning("Lote abortado: %s", exc)
        return HostResponse(STATUS_MALFORMED, str(exc))
    try:
        results = match_all(
            spans,
            decoded_text,
            policy=policy,
            parallel_workers=parallel_workers,
            parallel_min_batch=cfg.parallel_min_batch,
        )
    except MalformedCandidateError as exc:
        log.warning("Lote abortado: %s", exc)
        return HostResponse(STATUS_MALFORMED, str(exc))
    return HostResponse(STATUS_OK, results)
