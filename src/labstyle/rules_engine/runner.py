from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from pydantic import ValidationError

from .config import StyleConfig
from .context import RuleContext
from .errors import ConfigError
from .models import Block, Violation
from .registry import registry
from .rule import Rule

# Ensure built-in rules are imported/registered before the registry is read.
from . import rules as _builtin_rules  # noqa: F401

logger = logging.getLogger(__name__)


class RuleEngine:
    """Runs a fixed, ordered set of rules over parsed documents.

    The order rules are given in (requested names, `StyleConfig.enable`, or the
    registry) is the registration order used to break ties between violations
    on the same line.
    """

    def __init__(
        self,
        rule_names: Optional[Sequence[str]] = None,
        *,
        config: Optional[StyleConfig] = None,
        rules: Optional[Iterable[Rule]] = None,
    ):
        self._config = config or StyleConfig()
        if rules is not None:
            self._rules = list(rules)
        else:
            names = rule_names if rule_names is not None else self._config.enable
            self._rules = registry.resolve(names)
        _validate_config(self._rules, self._config)
        logger.debug("Rule engine ready with %d rule(s): %s", len(self._rules), ", ".join(self.rule_ids))

    @property
    def rule_ids(self) -> list[str]:
        return [rule.rule_id for rule in self._rules]

    @property
    def config(self) -> StyleConfig:
        return self._config

    def evaluate(self, blocks: Iterable[Block]) -> List[Violation]:
        ctx = RuleContext(blocks=tuple(blocks), config=self._config)
        collected: list[tuple[int, int, Violation]] = []
        for position, rule in enumerate(self._rules):
            for violation in rule.evaluate(ctx):
                collected.append((violation.line_range.start, position, violation))

        # Stable sort keeps each rule's own emission order for equal keys.
        collected.sort(key=lambda item: (item[0], item[1]))
        logger.debug("Evaluated %d block(s), %d violation(s)", len(ctx.blocks), len(collected))
        return [violation for _, _, violation in collected]


def evaluate(
    blocks: Iterable[Block],
    rules: Optional[Sequence[str]] = None,
    *,
    config: Optional[StyleConfig] = None,
) -> List[Violation]:
    return RuleEngine(rules, config=config).evaluate(blocks)


def _validate_config(rules: list[Rule], config: StyleConfig) -> None:
    active = {rule.rule_id for rule in rules}
    for rule_id in config.rules:
        if rule_id not in active and rule_id not in registry:
            raise ConfigError(f"Configuration given for unknown rule '{rule_id}'.", rule_id=rule_id)

    for rule in rules:
        try:
            rule.config_for(config)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration for rule '{rule.rule_id}': {exc}", rule_id=rule.rule_id) from exc
