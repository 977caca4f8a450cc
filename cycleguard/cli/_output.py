"""
Shared terminal output helpers for cycleguard CLI commands.
"""

import json
import sys
from typing import Any, Dict

import click


class _Color:
    """
    ANSI styling for CLI rows, switched off for pipes and --no-color.
    """
    _on: bool = True

    _CODES = {"green": 32, "red": 31, "bold": 1, "dim": 2}

    @classmethod
    def configure(cls, enabled: bool) -> None:
        cls._on = enabled and sys.stdout.isatty()

    @classmethod
    def paint(cls, style: str, s: str) -> str:
        if not cls._on:
            return s
        return f"\033[{cls._CODES[style]}m{s}\033[0m"

    @classmethod
    def green(cls, s: str) -> str:
        return cls.paint("green", s)

    @classmethod
    def red(cls, s: str) -> str:
        return cls.paint("red", s)

    @classmethod
    def bold(cls, s: str) -> str:
        return cls.paint("bold", s)

    @classmethod
    def dim(cls, s: str) -> str:
        return cls.paint("dim", s)


def _label(label: str) -> str:
    return _Color.dim(f"{label:<20}")


def _row_ok(label: str, value: str) -> str:
    return f"  {_label(label)}  {_Color.green('✅')}  {value}"

def _row_fail(label: str, value: str) -> str:
    return f"  {_label(label)}  {_Color.red('❌')}  {value}"

def _row_info(label: str, value: str) -> str:
    return f"  {_label(label)}     {value}"


def _emit_json(payload: Dict[str, Any]) -> None:
    click.echo(json.dumps(payload, indent=2, sort_keys=True))


def _emit_error(message: str, fmt: str) -> None:
    """Report an error on stderr in the requested output format."""
    if fmt == "json":
        click.echo(json.dumps({"error": message}), err=True)
    else:
        click.echo(_Color.red(f"❌ Error: {message}"), err=True)
