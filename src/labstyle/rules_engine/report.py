from __future__ import annotations

from typing import Iterable, Optional

from .models import Report, Violation


def build_report(violations: Iterable[Violation], *, document: Optional[str] = None) -> Report:
    unique: list[Violation] = []
    seen: set[Violation] = set()
    for violation in violations:
        # Exact match only: rule_name, line_range and message.
        if violation in seen:
            continue
        seen.add(violation)
        unique.append(violation)

    totals: dict[str, int] = {}
    for violation in unique:
        totals[violation.rule_name] = totals.get(violation.rule_name, 0) + 1

    return Report(
        document=document,
        passed=not unique,
        violation_count=len(unique),
        violations=unique,
        totals=totals,
    )


def format_violation(violation: Violation) -> str:
    return f"{violation.line_range}: [{violation.rule_name}] {violation.message}"


def render_text(report: Report) -> str:
    return "\n".join(format_violation(v) for v in report.violations)


def exit_status(report: Report) -> int:
    return 0 if report.passed else 1
