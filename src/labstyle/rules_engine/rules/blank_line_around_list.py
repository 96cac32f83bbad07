from __future__ import annotations

from ..config import BlankLineRuleConfig
from ..context import RuleContext, blank_lines_between
from ..models import BlockKind, Violation
from ..registry import register_rule
from ..rule import Rule


@register_rule
class BLANK_LINE_AROUND_LIST(Rule):
    rule_id = "BlankLineAroundList"
    rule_title = "Lists are separated from surrounding content by a blank line"
    style_guide_reference = "Markdown formatting: blank lines before and after lists"
    config_model = BlankLineRuleConfig

    def evaluate(self, ctx: RuleContext) -> list[Violation]:
        cfg = ctx.config.get_rule_config(self.rule_id, BlankLineRuleConfig)
        if not cfg.enabled:
            return []

        violations: list[Violation] = []
        for index, block in enumerate(ctx.blocks):
            # A list_item block is already a maximal run of items.
            if block.kind != BlockKind.LIST_ITEM:
                continue
            prev_block, next_block = ctx.neighbours(index)
            if prev_block is not None and blank_lines_between(prev_block, block) < cfg.min_blank_lines:
                violations.append(self.violation(block.line_range, "Missing blank line before list."))
            if next_block is not None and blank_lines_between(block, next_block) < cfg.min_blank_lines:
                violations.append(self.violation(block.line_range, "Missing blank line after list."))
        return violations
