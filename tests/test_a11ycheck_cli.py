from __future__ import annotations

import json
from pathlib import Path

import pytest

from a11ycheck.cli import main


def _tree_file(tmp_path: Path) -> Path:
    tree = {
        "tag": "main",
        "children": [
            {"tag": "img", "props": {"id": "hero", "src": "hero.png"}},
            {
                "tag": "span",
                "props": {"onClick": {"$handler": "open"}, "role": "button", "tabIndex": 0},
                "children": ["Open"],
            },
        ],
    }
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(tree), encoding="utf-8")
    return path


def test_audit_json_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["audit", str(_tree_file(tmp_path)), "--json"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["schema"] == "a11ycheck.audit.v1"
    assert payload["nodes_visited"] == 3
    assert payload["rule_counts"] == {
        "props.onClick.BUTTON_ROLE_ENTER": 1,
        "props.onClick.BUTTON_ROLE_SPACE": 1,
        "tags.img.MISSING_ALT": 1,
    }


def test_audit_device_flag_and_fail_on_findings(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(["audit", str(_tree_file(tmp_path)), "--device", "mobile", "--fail-on-findings"])
    out = capsys.readouterr().out
    assert code == 1
    assert "[warn] tags.img.MISSING_ALT <img#hero>" in out
    assert "BUTTON_ROLE" not in out
    assert "[fail] 1 finding(s) in 3 nodes" in out


def test_audit_uses_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "a11ycheck.toml"
    config.write_text(
        '[a11ycheck]\ndevice = ["mobile"]\nignore_ids = ["hero"]\n',
        encoding="utf-8",
    )
    code = main(
        ["audit", str(_tree_file(tmp_path)), "--config", str(config), "--fail-on-findings"]
    )
    assert code == 0
    assert "[ok] 3 nodes, no findings" in capsys.readouterr().out


def test_rules_lists_catalog(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["rules", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    ids = [rule["rule_id"] for rule in payload["rules"]]
    assert ids[0] == "props.onClick.NO_LABEL"
    assert ids[-1] == "tags.a.HASH_HREF_NEEDS_BUTTON"
    space = next(r for r in payload["rules"] if r["rule_id"].endswith("BUTTON_ROLE_SPACE"))
    assert space["skip_devices"] == ["mobile"]


def test_json_flag_is_accepted_before_subcommand(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--json", "rules"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["schema"] == "a11ycheck.rules.v1"

    assert main(["rules"]) == 0
    assert capsys.readouterr().out.startswith("props.onClick.NO_LABEL\n")


def test_missing_tree_reports_cli_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["audit", str(tmp_path / "nope.json"), "--json"])
    assert code == 3
    payload = json.loads(capsys.readouterr().out)
    assert payload["schema"] == "a11ycheck.error.v1"
    assert payload["ok"] is False


def test_invalid_json_tree_is_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert main(["audit", str(path)]) == 3
    assert "invalid JSON tree" in capsys.readouterr().err
