from __future__ import annotations

from ..config import CodeBlockLanguageRuleConfig
from ..context import RuleContext
from ..models import BlockKind, Violation
from ..registry import register_rule
from ..rule import Rule


@register_rule
class CODE_BLOCK_LANGUAGE(Rule):
    rule_id = "CodeBlockLanguage"
    rule_title = "Fenced code blocks declare their language"
    style_guide_reference = "Code formatting: language-tagged code blocks"
    config_model = CodeBlockLanguageRuleConfig

    def evaluate(self, ctx: RuleContext) -> list[Violation]:
        cfg = ctx.config.get_rule_config(self.rule_id, CodeBlockLanguageRuleConfig)
        if not cfg.enabled:
            return []

        return [
            self.violation(
                block.line_range,
                "Code block does not declare a language; add one after the opening fence (e.g. ```{r}).",
            )
            for block in ctx.blocks
            if block.kind == BlockKind.CODE_BLOCK and not block.language
        ]
