from __future__ import annotations

from ..config import BlankLineRuleConfig
from ..context import RuleContext, blank_lines_between
from ..models import Block, BlockKind, Violation
from ..registry import register_rule
from ..rule import Rule


def _header_title(block: Block) -> str:
    return block.raw_text.strip().lstrip("#").strip().rstrip("#").strip()


@register_rule
class BLANK_LINE_AROUND_HEADER(Rule):
    rule_id = "BlankLineAroundHeader"
    rule_title = "Headers are separated from surrounding content by a blank line"
    style_guide_reference = "Markdown formatting: blank lines before and after headers"
    config_model = BlankLineRuleConfig

    def evaluate(self, ctx: RuleContext) -> list[Violation]:
        cfg = ctx.config.get_rule_config(self.rule_id, BlankLineRuleConfig)
        if not cfg.enabled:
            return []

        violations: list[Violation] = []
        for index, block in enumerate(ctx.blocks):
            if block.kind != BlockKind.HEADER:
                continue
            prev_block, next_block = ctx.neighbours(index)
            title = _header_title(block)
            # Stacked headers and the document boundary need no separation.
            if (
                prev_block is not None
                and prev_block.kind != BlockKind.HEADER
                and blank_lines_between(prev_block, block) < cfg.min_blank_lines
            ):
                violations.append(
                    self.violation(block.line_range, f"Missing blank line before header '{title}'.")
                )
            if (
                next_block is not None
                and next_block.kind != BlockKind.HEADER
                and blank_lines_between(block, next_block) < cfg.min_blank_lines
            ):
                violations.append(
                    self.violation(block.line_range, f"Missing blank line after header '{title}'.")
                )
        return violations
