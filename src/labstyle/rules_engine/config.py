from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

T = TypeVar("T", bound=BaseModel)


class RuleConfigBase(BaseModel):
    # Reject misspelled keys instead of silently ignoring them.
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True


class BlankLineRuleConfig(RuleConfigBase):
    min_blank_lines: int = Field(default=1, ge=1)


class OneSentencePerLineRuleConfig(RuleConfigBase):
    terminal_marks: str = Field(default=".!?", min_length=1)
    # Tokens ending in a period that do not end a sentence.
    abbreviations: List[str] = Field(
        default_factory=lambda: [
            "e.g.",
            "i.e.",
            "etc.",
            "vs.",
            "cf.",
            "et al.",
            "approx.",
            "Fig.",
            "Eq.",
            "Dr.",
            "Mr.",
            "Ms.",
            "No.",
        ]
    )
    # Treat single capital letters followed by a period (author initials) as non-terminal.
    ignore_initials: bool = True
    # Only count a break when the next sentence starts with a capital letter or digit.
    require_capital_after: bool = True
    check_list_items: bool = False


class BacktickedCodeReferenceRuleConfig(RuleConfigBase):
    flag_calls: bool = True
    flag_file_names: bool = True
    flag_at_prefix: bool = True
    # Bracketed citations such as `[@coles2001]` or `[see @a; @b]` are not code.
    skip_citations: bool = True
    file_extensions: List[str] = Field(
        default_factory=lambda: [
            "R",
            "r",
            "Rmd",
            "qmd",
            "py",
            "ipynb",
            "csv",
            "txt",
            "json",
            "yaml",
            "yml",
            "nc",
            "rds",
            "xlsx",
            "md",
        ]
    )
    # File names only count when the stem looks like an identifier (snake_case or CamelCase).
    require_identifier_stem: bool = True
    check_list_items: bool = False


class AnnotationPairingRuleConfig(RuleConfigBase):
    pass


class CodeBlockLanguageRuleConfig(RuleConfigBase):
    pass


class HeaderLevelIncrementRuleConfig(RuleConfigBase):
    max_increment: int = Field(default=1, ge=1)


class StyleConfig(BaseModel):
    """Per-document style configuration.

    `enable` restricts the run to the listed rules (in that order); `rules`
    holds raw per-rule settings that each rule validates via `get_rule_config`.
    """

    enable: Optional[List[str]] = None
    rules: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def get_rule_config(
        self,
        rule_id: str,
        model: Type[T],
        default: Optional[T] = None,
    ) -> T:
        if rule_id not in self.rules:
            if default is not None:
                return default
            return model()  # type: ignore[call-arg]
        raw = self.rules.get(rule_id) or {}
        return model.model_validate(raw)


def style_config_from_mapping(raw: Any) -> StyleConfig:
    if raw is None:
        return StyleConfig()
    if not isinstance(raw, dict):
        raise ConfigError("Style config must be a mapping with optional 'enable' and 'rules' keys.")
    try:
        return StyleConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid style config: {exc}") from exc


def load_style_config(path: Union[str, Path]) -> StyleConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Style config file not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Style config is not valid YAML: {config_path}: {exc}") from exc
    return style_config_from_mapping(raw)
