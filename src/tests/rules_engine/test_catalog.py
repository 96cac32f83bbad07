import json

import yaml

from labstyle.rules_engine.catalog import build_catalog, dump_catalog, main


def test_catalog_lists_every_rule_with_schema():
    entries = build_catalog()
    by_id = {e.rule_id: e for e in entries}
    assert {
        "BlankLineAroundHeader",
        "BlankLineAroundList",
        "OneSentencePerLine",
        "BacktickedCodeReference",
        "AnnotationPairing",
        "CodeBlockLanguage",
        "HeaderLevelIncrement",
    } <= set(by_id)
    sentence = by_id["OneSentencePerLine"]
    assert sentence.config_model == "OneSentencePerLineRuleConfig"
    assert "abbreviations" in sentence.config_schema["properties"]


def test_dump_catalog_formats():
    catalog = [e.model_dump() for e in build_catalog()]
    assert json.loads(dump_catalog(catalog, "json"))[0]["rule_id"] == "BlankLineAroundHeader"
    assert yaml.safe_load(dump_catalog(catalog, "yaml"))[0]["rule_id"] == "BlankLineAroundHeader"


def test_catalog_main_prints_json(capsys):
    main(["--format", "json"])
    out = json.loads(capsys.readouterr().out)
    assert any(entry["rule_id"] == "AnnotationPairing" for entry in out)
