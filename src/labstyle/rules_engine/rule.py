from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Type

from .config import RuleConfigBase, StyleConfig
from .context import RuleContext
from .models import LineRange, Violation


class Rule(ABC):
    """A named, stateless check over a parsed document.

    Subclasses set `rule_id` (the name reported in violations), `rule_title`,
    `style_guide_reference` and `config_model`, and register with `@register_rule`.
    """

    rule_id: str
    rule_title: str
    style_guide_reference: str
    config_model: Optional[Type[RuleConfigBase]] = None

    def __init__(self):
        if not getattr(self, "rule_id", None):
            raise ValueError("Rule must define rule_id")

    def config_for(self, config: StyleConfig) -> RuleConfigBase:
        """This rule's typed settings; raises pydantic ValidationError on bad values."""
        return config.get_rule_config(self.rule_id, self.config_model or RuleConfigBase)

    def violation(self, line_range: LineRange, message: str) -> Violation:
        return Violation(rule_name=self.rule_id, line_range=line_range, message=message)

    @abstractmethod
    def evaluate(self, ctx: RuleContext) -> List[Violation]:  # pragma: no cover
        raise NotImplementedError
