from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from labstyle.pipelines.check import DocumentResult, check_documents
from labstyle.rules_engine.catalog import build_catalog, dump_catalog
from labstyle.rules_engine.config import StyleConfig, load_style_config
from labstyle.rules_engine.errors import ConfigError
from labstyle.rules_engine.report import format_violation
from labstyle.settings import get_settings

logger = logging.getLogger("labstyle")

LAB_SUFFIXES = (".qmd", ".Rmd", ".rmd", ".md")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2


def discover_documents(paths: Iterable[str]) -> list[Path]:
    found: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            found.extend(sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in LAB_SUFFIXES))
        elif path.is_file():
            found.append(path)
        else:
            raise FileNotFoundError(f"No such file or directory: {path}")
    return found


def read_documents(paths: Iterable[Path]) -> list[tuple[str, str]]:
    """(label, text) pairs; raises OSError naming the file that cannot be read or decoded."""
    documents: list[tuple[str, str]] = []
    for path in paths:
        try:
            documents.append((str(path), path.read_text(encoding="utf-8")))
        except UnicodeDecodeError as exc:
            raise OSError(f"{path}: cannot read: not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
        except OSError as exc:
            raise OSError(f"{path}: cannot read: {exc.strerror or exc}") from exc
    return documents


def _render_text(results: list[DocumentResult]) -> str:
    lines: list[str] = []
    for result in results:
        if result.error is not None:
            lines.append(f"{result.document}: {result.error}")
        elif result.report is not None:
            lines.extend(f"{result.document}:{format_violation(v)}" for v in result.report.violations)
    passed = sum(1 for r in results if r.passed)
    lines.append(f"{passed}/{len(results)} document(s) passed.")
    return "\n".join(lines)


def _render_json(results: list[DocumentResult]) -> str:
    payload = []
    for result in results:
        entry = {"document": result.document, "passed": result.passed}
        if result.error is not None:
            entry["error"] = {"message": str(result.error), "line": result.error.line}
        elif result.report is not None:
            entry["report"] = result.report.model_dump(mode="json")
        payload.append(entry)
    return json.dumps(payload, indent=2)


def main(argv: Optional[list[str]] = None) -> int:
    try:
        settings = get_settings()
    except ValueError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    parser = argparse.ArgumentParser(
        prog="labstyle-check",
        description="Check lab documents (.qmd, .Rmd, .md) against the lab style guide.",
    )
    parser.add_argument("paths", nargs="*", help="Files or directories to check.")
    parser.add_argument(
        "--rules",
        default=None,
        help="Comma-separated rule names to run, in order (default: all registered rules).",
    )
    parser.add_argument(
        "--config",
        default=settings.config_path,
        help="YAML style config with per-rule settings (or set LABSTYLE_CONFIG).",
    )
    parser.add_argument("--format", choices=("text", "json"), default="text", help="Output format.")
    parser.add_argument(
        "--max-workers",
        type=int,
        default=settings.max_workers,
        help="Number of documents checked in parallel.",
    )
    parser.add_argument("--list-rules", action="store_true", help="Print the rule catalog and exit.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.list_rules:
        catalog = [e.model_dump() for e in build_catalog()]
        print(dump_catalog(catalog, "json" if args.format == "json" else "yaml"))
        return EXIT_OK

    if not args.paths:
        parser.error("at least one path is required (or use --list-rules)")

    rule_names = settings.rules
    if args.rules:
        rule_names = tuple(name.strip() for name in args.rules.split(",") if name.strip())

    try:
        config = load_style_config(args.config) if args.config else StyleConfig()
        paths = discover_documents(args.paths)
        documents = read_documents(paths)
        results = check_documents(
            documents,
            list(rule_names) if rule_names is not None else None,
            config=config,
            max_workers=args.max_workers,
        )
    except ConfigError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except OSError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.format == "json":
        print(_render_json(results))
    else:
        print(_render_text(results))

    return EXIT_OK if all(r.passed for r in results) else EXIT_FAILED


def cli() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    raise SystemExit(main())
