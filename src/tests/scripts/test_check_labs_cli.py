import json

import pytest

from labstyle.scripts.check_labs import discover_documents, main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("LABSTYLE_RULES", "LABSTYLE_CONFIG", "LABSTYLE_LOG_LEVEL", "LABSTYLE_MAX_WORKERS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def lab_dir(tmp_path, conformant_lab):
    (tmp_path / "good.qmd").write_text(conformant_lab)
    nested = tmp_path / "week2"
    nested.mkdir()
    (nested / "messy.Rmd").write_text("## Title\nText right after.\n")
    (nested / "notes.txt").write_text("ignored")
    return tmp_path


def test_discover_documents_filters_suffixes(lab_dir):
    found = discover_documents([str(lab_dir)])
    assert [p.name for p in found] == ["good.qmd", "messy.Rmd"]


def test_passing_document_exits_zero(lab_dir, capsys):
    assert main([str(lab_dir / "good.qmd")]) == 0
    assert "1/1 document(s) passed." in capsys.readouterr().out


def test_failing_document_exits_one_with_listing(lab_dir, capsys):
    assert main([str(lab_dir)]) == 1
    out = capsys.readouterr().out
    assert "messy.Rmd:1: [BlankLineAroundHeader] Missing blank line after header 'Title'." in out
    assert "1/2 document(s) passed." in out


def test_parse_error_reported_and_exits_one(tmp_path, capsys):
    broken = tmp_path / "broken.md"
    broken.write_text("Intro.\n\n```r\nx\n")
    assert main([str(broken)]) == 1
    assert "document could not be parsed: unterminated code fence at line 3" in capsys.readouterr().out


def test_json_output(lab_dir, capsys):
    assert main(["--format", "json", str(lab_dir)]) == 1
    payload = json.loads(capsys.readouterr().out)
    by_name = {entry["document"].rsplit("/", 1)[-1]: entry for entry in payload}
    assert by_name["good.qmd"]["passed"] is True
    assert by_name["messy.Rmd"]["report"]["violation_count"] == 1


def test_rule_selection_and_config_file(lab_dir, tmp_path, capsys):
    assert main(["--rules", "OneSentencePerLine", str(lab_dir)]) == 0
    capsys.readouterr()

    cfg = tmp_path / "style.yaml"
    cfg.write_text("rules:\n  BlankLineAroundHeader:\n    enabled: false\n")
    assert main(["--config", str(cfg), str(lab_dir)]) == 0


def test_rules_from_environment(lab_dir, monkeypatch):
    monkeypatch.setenv("LABSTYLE_RULES", "CodeBlockLanguage")
    assert main([str(lab_dir)]) == 0


def test_unknown_rule_exits_two(lab_dir, capsys):
    assert main(["--rules", "NoSuchRule", str(lab_dir)]) == 2
    assert "configuration error" in capsys.readouterr().err


def test_missing_path_exits_two(tmp_path):
    assert main([str(tmp_path / "missing.qmd")]) == 2


def test_list_rules(capsys):
    assert main(["--list-rules", "--format", "json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["rule_id"] == "BlankLineAroundHeader"


def test_undecodable_file_exits_two_with_message(tmp_path, capsys):
    bad = tmp_path / "latin.qmd"
    bad.write_bytes(b"# T\n\n\xff\xfe bad\n")
    assert main([str(bad)]) == 2
    err = capsys.readouterr().err
    assert "latin.qmd: cannot read: not valid UTF-8" in err


def test_invalid_worker_setting_exits_two(lab_dir, monkeypatch, capsys):
    monkeypatch.setenv("LABSTYLE_MAX_WORKERS", "many")
    assert main([str(lab_dir)]) == 2
    assert "LABSTYLE_MAX_WORKERS must be an integer" in capsys.readouterr().err
