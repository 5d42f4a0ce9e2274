from __future__ import annotations

import json

import pytest

from catalog_search.cli import main


@pytest.fixture
def catalog_file(tmp_path, catalog_data):
    path = tmp_path / "features.json"
    path.write_text(json.dumps(catalog_data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.mark.smoke
def test_search_prints_ranked_results(catalog_file, capsys) -> None:
    assert main(["--catalog", str(catalog_file), "search", "command"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("1. [slash-commands] Slash Commands  (score: ")
    assert lines[2].startswith("3. [hooks] Hooks System")


def test_search_with_filters_and_sort(catalog_file, capsys) -> None:
    code = main(["--catalog", str(catalog_file), "search", "--status", "new", "--sort", "name"])
    assert code == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["1. [hooks] Hooks System", "2. [sub-agents] Sub-agents"]


def test_search_with_tag_and_limit(catalog_file, capsys) -> None:
    code = main(["--catalog", str(catalog_file), "search", "--tag", "commands", "--tag", "git", "--limit", "2"])
    assert code == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-1] == "... 1 more"


def test_search_in_other_language(catalog_file, capsys) -> None:
    assert main(["--catalog", str(catalog_file), "search", "斜杠", "--lang", "zh"]) == 0
    assert "[slash-commands] 斜杠命令" in capsys.readouterr().out


def test_search_without_results(catalog_file, capsys) -> None:
    assert main(["--catalog", str(catalog_file), "search", "zzzz"]) == 1
    assert capsys.readouterr().out.strip() == 'No results found for "zzzz"'


def test_suggest(catalog_file, capsys) -> None:
    assert main(["--catalog", str(catalog_file), "suggest", "comm"]) == 0
    assert capsys.readouterr().out.splitlines() == ["commands", "Slash Commands", "Background Commands"]


def test_stats(catalog_file, capsys) -> None:
    assert main(["--catalog", str(catalog_file), "stats"]) == 0
    stats = json.loads(capsys.readouterr().out)
    assert stats["total_records"] == 5
    assert stats["status_counts"]["new"] == 2


def test_export_csv_to_file(catalog_file, tmp_path, capsys) -> None:
    out = tmp_path / "exports" / "catalog.csv"
    assert main(["--catalog", str(catalog_file), "export", "--format", "csv", "--out", str(out)]) == 0
    assert out.read_text(encoding="utf-8").startswith("ID,Title (EN),Title (ZH)")
    assert "Exported 5 records" in capsys.readouterr().out


def test_export_json_to_stdout(catalog_file, capsys) -> None:
    assert main(["--catalog", str(catalog_file), "export"]) == 0
    assert len(json.loads(capsys.readouterr().out)["records"]) == 5


def test_missing_catalog_is_reported(tmp_path, capsys) -> None:
    assert main(["--catalog", str(tmp_path / "none.json"), "stats"]) == 2
    assert "error:" in capsys.readouterr().err
