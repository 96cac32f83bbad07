from __future__ import annotations

from typing import Optional

from ..config import HeaderLevelIncrementRuleConfig
from ..context import RuleContext
from ..models import BlockKind, Violation
from ..registry import register_rule
from ..rule import Rule


@register_rule
class HEADER_LEVEL_INCREMENT(Rule):
    rule_id = "HeaderLevelIncrement"
    rule_title = "Header levels increase one step at a time"
    style_guide_reference = "Document structure: header hierarchy"
    config_model = HeaderLevelIncrementRuleConfig

    def evaluate(self, ctx: RuleContext) -> list[Violation]:
        cfg = ctx.config.get_rule_config(self.rule_id, HeaderLevelIncrementRuleConfig)
        if not cfg.enabled:
            return []

        violations: list[Violation] = []
        previous: Optional[int] = None
        for block in ctx.blocks:
            if block.kind != BlockKind.HEADER or block.level is None:
                continue
            if previous is not None and block.level - previous > cfg.max_increment:
                violations.append(
                    self.violation(
                        block.line_range,
                        f"Header level jumps from h{previous} to h{block.level}.",
                    )
                )
            previous = block.level
        return violations
