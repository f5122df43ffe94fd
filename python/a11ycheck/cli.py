# SPDX-License-Identifier: AGPL-3.0-only
import argparse
import json
import sys
from pathlib import Path

from .audit import audit_tree
from .config import Config
from .host import element_from_dict
from .rules import CATALOG


def _read_text(path_or_dash):
    if path_or_dash == "-":
        return sys.stdin.read()
    return Path(path_or_dash).read_text(encoding="utf-8")


def _load_tree(path_or_dash):
    try:
        data = json.loads(_read_text(path_or_dash))
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON tree in {path_or_dash}: {exc}")
    return element_from_dict(data)


def _resolve_config(args):
    if args.config:
        return Config.load(Path(args.config))
    return Config.default()


def cmd_audit(args):
    config = _resolve_config(args)
    options = config.to_options()
    device = list(options.get("device") or [])
    for extra in args.device or []:
        if extra not in device:
            device.append(extra)
    root = _load_tree(args.tree)
    report = audit_tree(
        root,
        device=device,
        filter_fn=options.get("filterFn"),
        mode=None,
    )
    if args.json:
        payload = {"schema": "a11ycheck.audit.v1", "source": args.tree}
        payload.update(report)
        sys.stdout.write(json.dumps(payload, ensure_ascii=True) + "\n")
    else:
        for failure in report["failures"]:
            where = failure["tag"]
            if failure["node_id"]:
                where = f"{where}#{failure['node_id']}"
            sys.stdout.write(f"[warn] {failure['rule_id']} <{where}>: {failure['message']}\n")
        for err in report["internal_errors"]:
            sys.stderr.write(f"[error] {err}\n")
        if report["ok"]:
            sys.stdout.write(f"[ok] {report['nodes_visited']} nodes, no findings\n")
        else:
            sys.stdout.write(
                f"[fail] {report['failure_count']} finding(s) in {report['nodes_visited']} nodes\n"
            )
    if args.fail_on_findings and not report["ok"]:
        return 1
    return 0


def cmd_rules(args):
    if args.json:
        payload = {
            "schema": "a11ycheck.rules.v1",
            "rules": [rule.to_dict() for rule in CATALOG],
        }
        sys.stdout.write(json.dumps(payload, ensure_ascii=True) + "\n")
        return 0
    for rule in CATALOG:
        suffix = ""
        if rule.skip_devices:
            suffix = f" (skipped on: {', '.join(sorted(rule.skip_devices))})"
        sys.stdout.write(f"{rule.rule_id}{suffix}\n    {rule.message}\n")
    return 0


def _build_parser():
    parser = argparse.ArgumentParser(prog="a11ycheck")
    parser.add_argument("--json", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p_audit = sub.add_parser("audit", help="Audit a JSON element tree")
    p_audit.add_argument("tree", help="Path to a JSON tree file or - for stdin")
    p_audit.add_argument("--config", help="Path to a11ycheck.toml or pyproject.toml")
    p_audit.add_argument("--device", action="append", help="Device tag (repeatable), e.g. mobile")
    p_audit.add_argument("--fail-on-findings", action="store_true",
                         help="Exit with status 1 when any rule fails")
    p_audit.add_argument("--json", action="store_true", default=argparse.SUPPRESS)
    p_audit.set_defaults(func=cmd_audit)

    p_rules = sub.add_parser("rules", help="List the rule catalog")
    p_rules.add_argument("--json", action="store_true", default=argparse.SUPPRESS)
    p_rules.set_defaults(func=cmd_rules)

    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except Exception as exc:
        if args.json:
            err = {
                "schema": "a11ycheck.error.v1",
                "ok": False,
                "code": "CLI_ERROR",
                "message": str(exc),
            }
            sys.stdout.write(json.dumps(err, ensure_ascii=True) + "\n")
        else:
            sys.stderr.write(f"[error] {exc}\n")
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
