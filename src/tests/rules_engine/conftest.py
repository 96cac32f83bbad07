import textwrap

import pytest

from labstyle.adapters.markdown import parse
from labstyle.rules_engine.config import StyleConfig
from labstyle.rules_engine.context import RuleContext


@pytest.fixture
def make_ctx():
    def _make(text: str, *, rule_config: dict | None = None) -> RuleContext:
        return RuleContext(
            blocks=parse(textwrap.dedent(text)),
            config=StyleConfig(rules=rule_config or {}),
        )

    return _make


@pytest.fixture
def run_rule(make_ctx):
    def _run(rule_cls, text: str, *, rule_config: dict | None = None):
        return rule_cls().evaluate(make_ctx(text, rule_config=rule_config))

    return _run
