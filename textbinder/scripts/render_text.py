#!/usr/bin/env python3
"""Render a text template with placeholder bindings.

Loads settings from a .env file (in the current directory or specified via
--env-file) the way a calling application would, binds variables given on
the command line and prints the rendered text.

Usage examples:
  textbinder-render greeting.txt --var name=World
  echo "Hello {name.upper}" | textbinder-render - --var name=world
  textbinder-render mail.txt --vars-json vars.json --var subject=Hi
  textbinder-render mail.txt --vars-json vars.json --strict
  textbinder-render mail.txt --no-builtins --env-file /path/to/.env
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..binder import DEFAULT_FUNCTIONS, TextBinder
from ..config.base_settings import BaseSettings
from ..config.binder_settings import BinderSettings
from ..exceptions import TextBinderError
from ..tracing.logger import get_module_logger, setup_logging

logger = get_module_logger()


class UsageError(TextBinderError):
    """Invalid command-line input."""


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="textbinder-render",
        description="Render {placeholder} templates with optional function chains.",
    )
    parser.add_argument(
        "template",
        help="Template file path, or '-' to read from stdin.",
    )
    parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Bind a variable (repeatable). Overrides values from --vars-json.",
    )
    parser.add_argument(
        "--vars-json",
        default=None,
        metavar="FILE",
        help="JSON file holding an object of variable bindings.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Leave placeholders of unknown variables in place instead of blanking them.",
    )
    parser.add_argument(
        "--no-builtins",
        action="store_true",
        help="Do not resolve chain functions against the built-in function table.",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file. Defaults to the nearest .env from the working directory.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging (skipped functions, unbound placeholders).",
    )
    return parser.parse_args(argv)


def _read_template(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise UsageError(f"Template file not found: {path}")
    return path.read_text(encoding="utf-8")


def _collect_vars(vars_json: Optional[str], pairs: List[str]) -> Dict[str, Any]:
    bindings: Dict[str, Any] = {}

    if vars_json:
        path = Path(vars_json)
        if not path.is_file():
            raise UsageError(f"--vars-json file not found: {path}")
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise UsageError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise UsageError(f"{path} must contain a JSON object")
        bindings.update(loaded)

    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise UsageError(f"Expected NAME=VALUE, got {pair!r}")
        bindings[name] = value

    return bindings


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        if args.env_file and not Path(args.env_file).is_file():
            raise UsageError(f"--env-file not found: {args.env_file}")
        BaseSettings._load_dotenv_if_requested(True, [args.env_file] if args.env_file else None)
        settings = BinderSettings.from_env(load_dotenv=False)
        setup_logging("DEBUG" if args.verbose else settings.log_level)

        template = _read_template(args.template)
        bindings = _collect_vars(args.vars_json, args.var)

        builtins_enabled = settings.builtin_fallback and not args.no_builtins
        binder = TextBinder(DEFAULT_FUNCTIONS if builtins_enabled else {})
        default = False if args.strict else settings.default_for_missing
        logger.debug("Rendering %s with %d variable(s)", args.template, len(bindings))
        rendered = binder.render(template, bindings, default=default)
    except TextBinderError as exc:
        print(f"textbinder-render: {exc}", file=sys.stderr)
        return 1

    sys.stdout.write(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
