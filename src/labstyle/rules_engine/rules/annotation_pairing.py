from __future__ import annotations

from typing import Optional

from ..config import AnnotationPairingRuleConfig
from ..context import RuleContext, annotation_items, annotation_markers
from ..models import BlockKind, Violation
from ..registry import register_rule
from ..rule import Rule


def first_pairing_problem(markers: list[int], explained: list[int]) -> Optional[tuple[int, str]]:
    """Return (index, message) for the first mismatch between markers and explanations."""
    if not markers:
        return None
    lowest = min(markers)
    if lowest < 1:
        return lowest, f"Annotation markers must start at 1; found marker <{lowest}>."

    for position, number in enumerate(explained, start=1):
        if number != position:
            return position, (
                f"Annotation explanations must be numbered 1, 2, 3, ...; "
                f"expected {position} but found {number}."
            )

    marker_set = set(markers)
    covered = len(explained)
    for number in sorted(marker_set):
        if number > covered:
            return number, f"Annotation <{number}> has no numbered explanation after the code block."

    highest = max(marker_set)
    for position in range(1, highest + 1):
        if position not in marker_set:
            return position, (
                f"Annotation markers must start at 1 with no gaps; marker <{position}> is missing."
            )

    if covered > highest:
        extra = highest + 1
        return extra, f"Explanation {extra} has no matching annotation marker in the code block."
    return None


@register_rule
class ANNOTATION_PAIRING(Rule):
    rule_id = "AnnotationPairing"
    rule_title = "Code annotations are explained in order directly after the code block"
    style_guide_reference = "Code annotations: numbered markers with matching explanations"
    config_model = AnnotationPairingRuleConfig

    def evaluate(self, ctx: RuleContext) -> list[Violation]:
        cfg = ctx.config.get_rule_config(self.rule_id, AnnotationPairingRuleConfig)
        if not cfg.enabled:
            return []

        violations: list[Violation] = []
        for index, block in enumerate(ctx.blocks):
            markers = [number for _, number in annotation_markers(block)]
            if not markers:
                continue
            following = ctx.following(index)
            explained: list[int] = []
            if following is not None and following.kind == BlockKind.ANNOTATION:
                explained = [number for _, number in annotation_items(following)]

            problem = first_pairing_problem(markers, explained)
            if problem is None:
                continue
            _, message = problem
            violations.append(self.violation(block.line_range, message))
        return violations
