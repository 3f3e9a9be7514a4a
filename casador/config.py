"""
Configurações centrais do validador de spans.

Mantém valores padrão em um único lugar; um YAML opcional sobrescreve o que precisar.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from .batch import BATCH_POLICIES, DEFAULT_BATCH_POLICY, DEFAULT_PARALLEL_MIN_BATCH, BatchPolicy


DEFAULT_CONFIG_PATHS = (Path("casador.yaml"), Path("casador.yml"))
log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """Valores padrão para o validador."""

    # Política para spans rejeitados no lote
    batch_policy: BatchPolicy = DEFAULT_BATCH_POLICY

    # Paralelismo do lote
    parallel_workers: int = 1
    parallel_min_batch: int = DEFAULT_PARALLEL_MIN_BATCH


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """
    Carrega configurações a partir de YAML, com fallback para valores padrão.
    """
    base = AppConfig()

    path: Path | None = None
    if config_path:
        candidate = Path(config_path)
        if candidate.exists():
            path = candidate
    else:
        for candidate in DEFAULT_CONFIG_PATHS:
            if candidate.exists():
                path = candidate
                break

    if path is None:
        return base

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except FileNotFoundError:
        return base
    except Exception as exc:  # pragma: no cover - I/O edge case
        log.warning("Falha ao ler config %s; usando defaults. Erro: %s", path, exc)
        return base

    if not isinstance(data, dict):
        log.warning("Config %s tem formato inesperado; usando defaults.", path)
        return base

    overrides = {}
    for key, value in data.items():
        if key not in base.__dict__:
            continue
        if key == "batch_policy" and value not in BATCH_POLICIES:
            log.warning("batch_policy inválida em %s (%r); mantendo %s.", path, value, base.batch_policy)
            continue
        if key.startswith("parallel_"):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                log.warning("%s inválido em %s (%r); mantendo %s.", key, path, value, base.__dict__[key])
                continue
        overrides[key] = value

    merged = {**base.__dict__, **overrides}
    return AppConfig(**merged)
