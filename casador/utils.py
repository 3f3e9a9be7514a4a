"""
Funções utilitárias compartilhadas.
"""

from __future__ import annotations

import logging
from pathlib import Path


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configura logging simples para console."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return logging.getLogger("casador")


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Lê arquivo texto com encoding definido."""
    return path.read_text(encoding=encoding)
