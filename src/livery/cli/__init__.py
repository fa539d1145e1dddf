"""
Livery CLI package.

Commands are auto-discovered from domain subfolders (brands/, frontier/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter, format_json
from ._args import add_brand_arg, add_json_flag, add_repo_root_flag
from ._utils import get_repo_root, load_settings

__all__ = [
    # Output formatting
    "OutputFormatter",
    "format_json",
    # Argument helpers
    "add_brand_arg",
    "add_json_flag",
    "add_repo_root_flag",
    # Utilities
    "get_repo_root",
    "load_settings",
]
