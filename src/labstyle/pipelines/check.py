from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence, Union

from labstyle.adapters.markdown import parse
from labstyle.rules_engine.config import StyleConfig
from labstyle.rules_engine.errors import ParseError
from labstyle.rules_engine.models import Report
from labstyle.rules_engine.report import build_report
from labstyle.rules_engine.runner import RuleEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentResult:
    document: str
    report: Optional[Report] = None
    error: Optional[ParseError] = None

    @property
    def passed(self) -> bool:
        return self.error is None and self.report is not None and self.report.passed


def check_text(
    text: str,
    rule_names: Optional[Sequence[str]] = None,
    *,
    config: Optional[StyleConfig] = None,
    document: Optional[str] = None,
    engine: Optional[RuleEngine] = None,
) -> Report:
    """Parse, evaluate and report one document. Raises ParseError / ConfigError."""
    engine = engine or RuleEngine(rule_names, config=config)
    blocks = parse(text)
    return build_report(engine.evaluate(blocks), document=document)


def check_documents(
    documents: Union[Mapping[str, str], Iterable[tuple[str, str]]],
    rule_names: Optional[Sequence[str]] = None,
    *,
    config: Optional[StyleConfig] = None,
    max_workers: int = 1,
) -> list[DocumentResult]:
    """
    Check many (name, text) documents independently, results in input order.

    Configuration errors surface before any document is processed; a document
    that fails to parse is recorded on its own result and does not stop the batch.
    """
    engine = RuleEngine(rule_names, config=config)
    items = list(documents.items()) if isinstance(documents, Mapping) else list(documents)

    def _check_one(item: tuple[str, str]) -> DocumentResult:
        name, text = item
        try:
            report = check_text(text, engine=engine, document=name)
        except ParseError as exc:
            logger.warning("%s: %s", name, exc)
            return DocumentResult(document=name, error=exc)
        return DocumentResult(document=name, report=report)

    logger.info("Checking %d document(s) with %d worker(s)", len(items), max_workers)
    if max_workers <= 1 or len(items) <= 1:
        results = [_check_one(item) for item in items]
    else:
        # Rules are stateless and the engine is read-only, so it is shared across threads.
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(_check_one, items))

    failed = sum(1 for result in results if not result.passed)
    logger.info("Checked %d document(s), %d did not pass", len(results), failed)
    return results
