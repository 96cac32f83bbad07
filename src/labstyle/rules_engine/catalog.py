from __future__ import annotations

import argparse
import json
from typing import Any, Dict

import yaml
from pydantic import BaseModel

from .registry import registry

# Ensure built-in rules are imported/registered when generating a catalog.
from . import rules as _builtin_rules  # noqa: F401


class RuleCatalogEntry(BaseModel):
    rule_id: str
    rule_title: str
    style_guide_reference: str = ""

    module: str
    class_name: str

    config_model: str
    config_schema: Dict[str, Any]


def build_catalog() -> list[RuleCatalogEntry]:
    """Rules in registration order, which is also the default evaluation order."""
    entries: list[RuleCatalogEntry] = []
    for rule_id in registry.ids():
        rule_cls = registry.get(rule_id)
        cfg_model = getattr(rule_cls, "config_model", None)
        cfg_schema: Dict[str, Any] = {}
        cfg_model_name = ""
        if cfg_model is not None:
            cfg_model_name = cfg_model.__name__
            cfg_schema = cfg_model.model_json_schema()

        entries.append(
            RuleCatalogEntry(
                rule_id=rule_id,
                rule_title=getattr(rule_cls, "rule_title", ""),
                style_guide_reference=getattr(rule_cls, "style_guide_reference", ""),
                module=rule_cls.__module__,
                class_name=rule_cls.__name__,
                config_model=cfg_model_name,
                config_schema=cfg_schema,
            )
        )
    return entries


def dump_catalog(catalog: list[dict[str, Any]], fmt: str = "yaml") -> str:
    if fmt == "json":
        return json.dumps(catalog, indent=2, sort_keys=True)
    return yaml.safe_dump(catalog, sort_keys=True)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print the lab style rule catalog from the registry.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)

    catalog = [e.model_dump() for e in build_catalog()]
    print(dump_catalog(catalog, args.format))


if __name__ == "__main__":
    main()
