"""CLI output formatting (JSON and text modes)."""
from __future__ import annotations

import json
import sys
from typing import Any, Optional


class OutputFormatter:
    """Output formatter shared by all Livery commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def error(self, error: Exception, message: Optional[str] = None) -> None:
        msg = message or str(error)
        if self.json_mode:
            to_json = getattr(error, "to_json_error", None)
            payload = to_json() if callable(to_json) else {"code": type(error).__name__, "message": msg}
            print(json.dumps({"error": payload}, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(format_json(data, indent=self.indent))

    def text(self, message: str) -> None:
        print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


def format_json(data: Any, indent: Optional[int] = 2) -> str:
    return json.dumps(data, indent=indent, default=str)


__all__ = ["OutputFormatter", "format_json"]
