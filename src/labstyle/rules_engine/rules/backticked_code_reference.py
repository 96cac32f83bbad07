from __future__ import annotations

import re
from functools import lru_cache

from ..config import BacktickedCodeReferenceRuleConfig
from ..context import RuleContext
from ..models import BlockKind, LineRange, Violation
from ..registry import register_rule
from ..rule import Rule

_CODE_SPAN_RE = re.compile(r"(`+)(.+?)\1")
_LINK_TARGET_RE = re.compile(r"\]\([^)]*\)")
_AUTOLINK_RE = re.compile(r"<[a-zA-Z][\w+.-]*:[^>\s]*>")
_URL_RE = re.compile(r"\b(?:https?|ftp)://\S+")
_CITATION_RE = re.compile(r"\[[^\[\]]*@[^\[\]]*\](?!\()")

_CALL_RE = re.compile(r"(?<![\w`.])[A-Za-z_][\w.]*\(\)")
_AT_RE = re.compile(r"(?<![\w`@])@[A-Za-z_][\w-]*(?:\.[\w-]+)*")
_SNAKE_STEM_RE = re.compile(r"[A-Za-z0-9]_[A-Za-z0-9]")
_CAMEL_STEM_RE = re.compile(r"[a-z0-9][A-Z]")


def _blank(text: str, pattern: "re.Pattern[str]") -> str:
    return pattern.sub(lambda m: " " * len(m.group(0)), text)


@lru_cache(maxsize=32)
def _file_name_re(extensions: tuple[str, ...]) -> "re.Pattern[str]":
    alternation = "|".join(re.escape(ext) for ext in sorted(set(extensions), key=len, reverse=True))
    return re.compile(rf"(?<![\w`./-])([\w-]+)\.(?:{alternation})(?![\w])")


def _is_identifier_stem(stem: str) -> bool:
    return bool(_SNAKE_STEM_RE.search(stem) or _CAMEL_STEM_RE.search(stem))


def find_code_references(line: str, cfg: BacktickedCodeReferenceRuleConfig) -> list[tuple[int, str]]:
    """(column, token) for each code-shaped token outside backticks, in line order."""
    scrubbed = line
    for pattern in (_CODE_SPAN_RE, _LINK_TARGET_RE, _AUTOLINK_RE, _URL_RE):
        scrubbed = _blank(scrubbed, pattern)
    if cfg.skip_citations:
        scrubbed = _blank(scrubbed, _CITATION_RE)

    candidates: list[tuple[int, int, str]] = []
    if cfg.flag_calls:
        candidates.extend((m.start(), m.end(), m.group(0)) for m in _CALL_RE.finditer(scrubbed))
    if cfg.flag_file_names and cfg.file_extensions:
        for match in _file_name_re(tuple(cfg.file_extensions)).finditer(scrubbed):
            if cfg.require_identifier_stem and not _is_identifier_stem(match.group(1)):
                continue
            candidates.append((match.start(), match.end(), match.group(0)))
    if cfg.flag_at_prefix:
        candidates.extend((m.start(), m.end(), m.group(0)) for m in _AT_RE.finditer(scrubbed))

    # One report per span of text even when several shapes match it.
    found: list[tuple[int, str]] = []
    covered_until = -1
    for start, end, token in sorted(candidates, key=lambda c: (c[0], -c[1])):
        if start < covered_until:
            continue
        found.append((start, token))
        covered_until = end
    return found


@register_rule
class BACKTICKED_CODE_REFERENCE(Rule):
    rule_id = "BacktickedCodeReference"
    rule_title = "Code elements in prose are wrapped in backticks"
    style_guide_reference = "Code formatting: inline code references use backticks"
    config_model = BacktickedCodeReferenceRuleConfig

    def evaluate(self, ctx: RuleContext) -> list[Violation]:
        cfg = ctx.config.get_rule_config(self.rule_id, BacktickedCodeReferenceRuleConfig)
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
                for _, token in find_code_references(line, cfg):
                    violations.append(
                        self.violation(
                            LineRange.single(line_no),
                            f"Code reference '{token}' should be wrapped in backticks.",
                        )
                    )
        return violations
