from __future__ import annotations

import re
from typing import Optional

from ..config import OneSentencePerLineRuleConfig
from ..context import RuleContext
from ..models import BlockKind, LineRange, Violation
from ..registry import register_rule
from ..rule import Rule

_CODE_SPAN_RE = re.compile(r"(`+)(.+?)\1")
_LINK_TARGET_RE = re.compile(r"\]\([^)]*\)")
_INITIAL_RE = re.compile(r"(?<![\w.])[A-Z]\.")
_LIST_MARKER_RE = re.compile(r"^\s*(?:[-*+]|\d{1,9}[.)])[ \t]+")
# Characters that may open a sentence before its first letter.
_LEADING_PUNCT = "*_\"'([“‘"


def _mask(text: str, pattern: "re.Pattern[str]", fill: str = "x") -> str:
    return pattern.sub(lambda m: fill * len(m.group(0)), text)


def _mask_abbreviations(text: str, abbreviations: list[str]) -> str:
    for abbreviation in sorted(abbreviations, key=len, reverse=True):
        pattern = re.compile(r"(?<!\w)" + re.escape(abbreviation))
        text = _mask(text, pattern)
    return text


def find_sentence_break(line: str, cfg: OneSentencePerLineRuleConfig) -> Optional[int]:
    """Column of the first mid-line sentence boundary, or None."""
    # Code spans become capitals so a sentence opening with inline code still counts.
    scrubbed = _mask(line, _CODE_SPAN_RE, fill="X")
    scrubbed = _mask(scrubbed, _LINK_TARGET_RE)
    scrubbed = _mask_abbreviations(scrubbed, cfg.abbreviations)
    if cfg.ignore_initials:
        scrubbed = _mask(scrubbed, _INITIAL_RE, fill="X")

    marks = re.escape(cfg.terminal_marks)
    boundary = re.compile(rf"[{marks}]+[\"'”’)\]*_]*\s+(?=\S)")
    for match in boundary.finditer(scrubbed):
        rest = scrubbed[match.end():].lstrip(_LEADING_PUNCT)
        if not rest:
            continue
        if cfg.require_capital_after and not (rest[0].isupper() or rest[0].isdigit()):
            continue
        return match.start()
    return None


@register_rule
class ONE_SENTENCE_PER_LINE(Rule):
    rule_id = "OneSentencePerLine"
    rule_title = "Each sentence starts on its own line"
    style_guide_reference = "Markdown formatting: one sentence per line"
    config_model = OneSentencePerLineRuleConfig

    def evaluate(self, ctx: RuleContext) -> list[Violation]:
        cfg = ctx.config.get_rule_config(self.rule_id, OneSentencePerLineRuleConfig)
        if not cfg.enabled:
            return []

        kinds = {BlockKind.PARAGRAPH}
        if cfg.check_list_items:
            kinds.add(BlockKind.LIST_ITEM)

        violations: list[Violation] = []
        for block in ctx.blocks:
            if block.kind not in kinds:
                continue
            for line_no, line in block.numbered_lines():
                if not line.strip():
                    continue
                text = _LIST_MARKER_RE.sub("", line) if block.kind == BlockKind.LIST_ITEM else line
                column = find_sentence_break(text, cfg)
                if column is None:
                    continue
                violations.append(
                    self.violation(
                        LineRange.single(line_no),
                        "Line contains more than one sentence; start each sentence on a new line.",
                    )
                )
        return violations
