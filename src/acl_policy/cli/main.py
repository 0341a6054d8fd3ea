"""Command-line front end: parse one policy file and print the result."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

from acl_policy import __version__
from acl_policy.catalog import RULE_KINDS
from acl_policy.config_loader import load_parser_settings
from acl_policy.decoder import parse
from acl_policy.exceptions import ConfigLoadError
from acl_policy.printer import format_policy, quote
from acl_policy.schemas import Diagnostic, PolicyDocument, Rule, ServiceRule, Severity, has_errors

from .exceptions import CliError

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "acl_policy.hcl"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="acl-policy",
        description="Parse an ACL policy file and print its rules.",
    )
    parser.add_argument("filename", nargs="?", default=DEFAULT_FILENAME, help="Policy file to parse")
    parser.add_argument("--config", help="YAML file with parser settings")
    parser.add_argument(
        "--format",
        choices=("text", "json", "hcl"),
        default="text",
        help="Output format for a successfully parsed policy",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args.filename, args.config, args.format)
    except CliError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code


def run(filename: str, config_path: Optional[str], output_format: str, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    try:
        settings = load_parser_settings(config_path)
    except ConfigLoadError as exc:
        raise CliError(str(exc))

    logger.debug("Parsing %s", filename)
    document, diagnostics = parse(filename, settings)

    if document is None or has_errors(diagnostics):
        print("error parsing file:", file=sys.stderr)
        for diag in diagnostics:
            print(_render(diag), file=sys.stderr)
        return 1

    for diag in diagnostics:
        print(_render(diag), file=sys.stderr)

    if output_format == "json":
        json.dump(document.model_dump(mode="json"), out, indent=2)
        out.write("\n")
    elif output_format == "hcl":
        out.write(format_policy(document))
    else:
        out.write(describe_document(document))
    return 0


def describe_document(document: PolicyDocument) -> str:
    """Human-readable dump listing only the non-empty rule categories."""
    lines = ["PARSED CONFIG", f"default acl: {document.default_acl}"]
    for kind in RULE_KINDS.values():
        rules = getattr(document, kind.document_field)
        if not rules:
            continue
        lines.append(f"** {kind.heading} **")
        lines.extend(describe_rule(rule) for rule in rules)
    return "\n".join(lines) + "\n"


def describe_rule(rule: Rule) -> str:
    text = f"  name={quote(rule.name)} policy={quote(rule.policy)}"
    if isinstance(rule, ServiceRule) and rule.intentions is not None:
        text += f" intentions={quote(rule.intentions)}"
    return text


def _render(diag: Diagnostic) -> str:
    if diag.severity == Severity.WARNING:
        return f"warning: {diag.render()}"
    return diag.render()


if __name__ == "__main__":
    sys.exit(main())
