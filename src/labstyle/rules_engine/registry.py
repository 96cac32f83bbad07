from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence, Type

from .config import RuleConfigBase
from .errors import ConfigError
from .rule import Rule


class RuleRegistry:
    """Rule classes keyed by the name reported in violations, kept in registration order."""

    def __init__(self):
        self._rules: Dict[str, Type[Rule]] = {}

    def register(self, rule_cls: Type[Rule]) -> None:
        rule_id = getattr(rule_cls, "rule_id", None)
        if not rule_id:
            raise ValueError(f"{rule_cls.__name__} does not define rule_id")
        if rule_id in self._rules:
            raise ValueError(f"Rule name already registered: {rule_id}")
        model = getattr(rule_cls, "config_model", None)
        if model is not None and not (isinstance(model, type) and issubclass(model, RuleConfigBase)):
            raise ValueError(f"{rule_id}: config_model must subclass RuleConfigBase")
        self._rules[rule_id] = rule_cls

    def resolve(self, names: Optional[Sequence[str]] = None) -> list[Rule]:
        """Instantiate the named rules in the given order, or every rule when names is None."""
        if names is None:
            return [cls() for cls in self._rules.values()]
        if isinstance(names, str):
            raise ConfigError("Rule names must be given as a list, not a single string.")

        rules: list[Rule] = []
        seen: set[str] = set()
        for name in names:
            if name not in self._rules:
                known = ", ".join(sorted(self._rules))
                raise ConfigError(f"Unknown rule '{name}' (known rules: {known}).", rule_id=name)
            if name in seen:
                raise ConfigError(f"Rule '{name}' requested more than once.", rule_id=name)
            seen.add(name)
            rules.append(self._rules[name]())
        return rules

    def get(self, rule_id: str) -> Type[Rule]:
        return self._rules[rule_id]

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def ids(self) -> Iterable[str]:
        return self._rules.keys()


registry = RuleRegistry()


def register_rule(rule_cls: Type[Rule]) -> Type[Rule]:
    registry.register(rule_cls)
    return rule_cls
