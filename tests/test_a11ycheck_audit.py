from __future__ import annotations

import warnings

import pytest

from a11ycheck import A11yValidationError, A11yWarning, audit_tree, el


def k() -> None:
    return None


def _tree() -> object:
    return el(
        "main",
        el("img", id="foo", src="foo.jpg"),
        el("img", id="bar", src="foo.jpg"),
        el("span", "Go", onClick=k, role="button", tabIndex=0),
    )


def test_audit_tree_collect_only_reports_counts() -> None:
    report = audit_tree(_tree(), mode=None)
    assert report["ok"] is False
    assert report["mode"] is None
    assert report["nodes_visited"] == 4
    assert report["failure_count"] == 4
    assert report["rule_counts"] == {
        "props.onClick.BUTTON_ROLE_ENTER": 1,
        "props.onClick.BUTTON_ROLE_SPACE": 1,
        "tags.img.MISSING_ALT": 2,
    }
    assert [f["node_id"] for f in report["failures"][:2]] == ["foo", "bar"]
    assert report["internal_errors"] == []


def test_audit_tree_respects_device_and_filter() -> None:
    report = audit_tree(
        _tree(),
        device=["mobile"],
        filter_fn=lambda tag, node_id, message: node_id == "bar",
        mode=None,
    )
    assert report["device"] == ["mobile"]
    assert [f["node_id"] for f in report["failures"]] == ["bar"]


def test_audit_tree_warn_mode_emits_warnings() -> None:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        report = audit_tree(el("img", src="x.png"), mode="warn")
    assert report["failure_count"] == 1
    assert any(issubclass(w.category, A11yWarning) for w in caught)


def test_audit_tree_raise_mode_carries_report() -> None:
    with pytest.raises(A11yValidationError) as excinfo:
        audit_tree(el("img", src="x.png"), mode="raise")
    assert excinfo.value.report["rule_counts"] == {"tags.img.MISSING_ALT": 1}


def test_audit_tree_raise_mode_passes_clean_tree() -> None:
    report = audit_tree(el("img", src="x.png", alt="Harbor at dusk"), mode="raise")
    assert report["ok"] is True
    assert report["failures"] == []


def test_audit_tree_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        audit_tree(el("div"), mode="explode")
