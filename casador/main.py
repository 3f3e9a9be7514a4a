"""
CLI principal para validar spans candidatos.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .batch import BATCH_POLICIES, MalformedCandidateError, match_all
from .config import AppConfig, load_config
from .host_adapter import STATUS_OK, find_matches, ping
from .utils import read_text, setup_logging


def build_parser(cfg: AppConfig) -> argparse.ArgumentParser:
    """Constroi o parser de argumentos com subcomandos verifica/lote/ping."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--debug",
        action="store_true",
        help="Ativa logs detalhados.",
    )  # permite --debug antes ou depois do subcomando
    parser = argparse.ArgumentParser(
        description="Valida se spans encontrados por busca exata são palavras inteiras.",
        parents=[common],
    )
    parser.add_argument("--config", type=str, help="Arquivo YAML de configuração (padrão: casador.yaml).")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_text_args(p: argparse.ArgumentParser) -> None:
        group = p.add_mutually_exclusive_group(required=True)
        group.add_argument("--text", type=str, help="Texto onde os spans foram encontrados.")
        group.add_argument("--text-file", type=str, help="Arquivo UTF-8 com o texto.")

    # Subcomando: span único
    v = sub.add_parser("verifica", parents=[common], help="Valida um único span (start, length).")
    add_text_args(v)
    v.add_argument("--start", type=int, required=True, help="Posição inicial (em caracteres).")
    v.add_argument("--length", type=int, required=True, help="Tamanho do span (em caracteres).")

    # Subcomando: lote
    b = sub.add_parser("lote", parents=[common], help="Valida uma lista de spans e devolve os trechos.")
    add_text_args(b)
    spans_group = b.add_mutually_exclusive_group(required=True)
    spans_group.add_argument("--spans", type=str, help='Lista JSON de pares, ex.: "[[10, 5], [22, 3]]".')
    spans_group.add_argument("--spans-file", type=str, help="Arquivo JSON com a lista de pares.")
    b.add_argument("--policy", type=str, choices=list(BATCH_POLICIES), default=cfg.batch_policy)
    b.add_argument(
        "--parallel",
        type=int,
        default=cfg.parallel_workers,
        help="Número de workers paralelos. A ordem da saída é sempre a da entrada.",
    )

    sub.add_parser("ping", parents=[common], help="Sonda de saúde.")
    return parser


def _read_user_file(path_str: str) -> str:
    path = Path(path_str)
    try:
        return read_text(path)
    except FileNotFoundError:
        raise SystemExit(f"Arquivo não encontrado: {path}")
    except (OSError, UnicodeDecodeError) as exc:
        raise SystemExit(f"Falha ao ler {path}: {exc}")


def _load_text(args) -> str:
    if args.text is not None:
        return args.text
    return _read_user_file(args.text_file)


def _load_spans(args) -> Any:
    raw = args.spans if args.spans is not None else _read_user_file(args.spans_file)
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Lista de spans não é JSON válido: {exc}")


def _emit(status: str, result: Any) -> None:
    sys.stdout.write(json.dumps({"status": status, "result": result}, ensure_ascii=False) + "\n")


def run_verify(args, logger: logging.Logger) -> None:
    """Valida um único span e imprime o resultado no mesmo formato do adaptador."""
    text = _load_text(args)
    response = find_matches(args.start, args.length, text)
    if response.status == STATUS_OK:
        logger.info("Span (%d, %d) casou: %r", args.start, args.length, response.result)
    else:
        logger.info("Span (%d, %d) não casou (%s).", args.start, args.length, response.status)
    _emit(*response)


def run_batch(args, cfg: AppConfig, logger: logging.Logger) -> None:
    """Valida um lote de spans e imprime a lista de trechos."""
    text = _load_text(args)
    spans = _load_spans(args)
    try:
        results = match_all(
            spans,
            text,
            policy=args.policy,
            parallel_workers=max(1, args.parallel),
            parallel_min_batch=cfg.parallel_min_batch,
        )
    except MalformedCandidateError as exc:
        logger.warning("Lote abortado: %s", exc)
        raise SystemExit(str(exc))
    logger.info("Lote processado: %d resultados (política=%s).", len(results), args.policy)
    _emit(STATUS_OK, results)


def main(argv: list[str] | None = None) -> None:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", type=str)
    known, _ = pre.parse_known_args(argv)
    cfg = load_config(known.config)
    parser = build_parser(cfg)
    args = parser.parse_args(argv)
    logger = setup_logging(logging.DEBUG if args.debug else logging.INFO)

    if args.command == "verifica":
        run_verify(args, logger)
    elif args.command == "lote":
        run_batch(args, cfg, logger)
    elif args.command == "ping":
        _emit(*ping())
    else:
        parser.error("Comando inválido.")


if __name__ == "__main__":
    main()
