"""
Command-line entry point for Livery.

Commands are found on disk rather than registered by hand: every
subfolder of ``livery/cli`` is a domain (``brands``, ``frontier``) and every
public module inside it is a command exposing::

    SUMMARY = "one-line help"
    def register_args(parser: argparse.ArgumentParser) -> None: ...
    def main(args: argparse.Namespace) -> int: ...

so ``livery/cli/brands/list.py`` becomes ``livery brands list``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from contextlib import nullcontext
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, NamedTuple, Optional

from livery.core.exceptions import LiveryError
from livery.core.utils.profiling import Profiler, enable_profiler, span

logger = logging.getLogger(__name__)

CLI_DIR = Path(__file__).parent


class Command(NamedTuple):
    module: Any
    summary: str
    register_args: Optional[Callable[[argparse.ArgumentParser], None]]
    main: Optional[Callable[[argparse.Namespace], int]]


def _is_public_module(path: Path) -> bool:
    return path.suffix == ".py" and not path.name.startswith("_")


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Domain name -> directory, for each subfolder holding at least one command."""
    return {
        item.name: item
        for item in sorted(CLI_DIR.iterdir())
        if item.is_dir()
        and not item.name.startswith("_")
        and any(_is_public_module(f) for f in item.iterdir())
    }


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> dict[str, Command]:
    """Import the command modules of ``domain``; modules that fail to import are skipped with a warning."""
    commands: dict[str, Command] = {}
    with span("cli.discover.domain_commands", domain=domain):
        for path in sorted((CLI_DIR / domain).glob("*.py")):
            if not _is_public_module(path):
                continue
            dotted = f"livery.cli.{domain}.{path.stem}"
            try:
                with span("cli.discover.import", module=dotted):
                    module = importlib.import_module(dotted)
            except ImportError as exc:
                print(f"Warning: skipping {domain} {path.stem}: {exc}", file=sys.stderr)
                continue
            commands[path.stem] = Command(
                module=module,
                summary=getattr(module, "SUMMARY", f"{domain} {path.stem}"),
                register_args=getattr(module, "register_args", None),
                main=getattr(module, "main", None),
            )
    return commands


def _add_global_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Print span timings for discovery, config loading and the command (stderr).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log to stderr (-v info, -vv debug).",
    )
    parser.add_argument("--log-file", type=str, help="Also write log records to this file.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="livery",
        description="Livery - brand overlay resolution for multi-brand site builds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_global_flags(parser)
    domains = parser.add_subparsers(
        dest="domain", title="domains", description="Available command domains", metavar="<domain>"
    )

    for domain in discover_domains():
        commands = discover_commands(domain)
        if not commands:
            continue
        domain_parser = domains.add_parser(domain, help=f"{domain.title()} commands")
        sub = domain_parser.add_subparsers(
            dest="command", title="commands", description=f"Available {domain} commands", metavar="<command>"
        )
        for name, command in commands.items():
            dashed = name.replace("_", "-")
            cmd_parser = sub.add_parser(
                dashed, aliases=[name] if dashed != name else [], help=command.summary
            )
            if command.register_args is not None:
                command.register_args(cmd_parser)
            if command.main is not None:
                cmd_parser.set_defaults(_func=command.main)

    return parser


def _get_version() -> str:
    from livery import __version__

    return __version__


def _configure_logging(args: argparse.Namespace) -> None:
    """Install handlers from the ``logging`` config section plus CLI flags.

    A broken project configuration falls back to defaults so the command can
    still report its own error.
    """
    from livery.core.stdlib_logging import configure_stdlib_logging

    level = "WARNING"
    log_path: Optional[Path] = None
    try:
        from livery.cli._utils import get_repo_root
        from livery.core.config.domains import LoggingConfig

        cfg = LoggingConfig(repo_root=get_repo_root(args))
        level, log_path = cfg.level, cfg.file
    except LiveryError as exc:
        logger.debug("Logging config unavailable: %s", exc)

    if args.verbose:
        level = "DEBUG" if args.verbose > 1 else "INFO"
    if args.log_file:
        log_path = Path(args.log_file)
    configure_stdlib_logging(level=level, log_path=log_path)


def _run(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    func: Optional[Callable[[argparse.Namespace], int]] = getattr(args, "_func", None)
    if func is None:
        # Domain given without a command.
        domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)
        if domain_parser is not None:
            domain_parser.print_help()
        return 0

    _configure_logging(args)
    try:
        with span("cli.command.exec", command=f"{args.domain} {args.command}"):
            return func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except LiveryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> int:
    """Parse ``argv`` and run the selected command; returns the exit code."""
    if argv is None:
        argv = sys.argv[1:]

    profiler = Profiler() if "--profile" in argv else None
    result = 0
    with enable_profiler(profiler) if profiler else nullcontext():
        with span("cli.total"):
            with span("cli.parser.build"):
                parser = build_parser()
            args = parser.parse_args(argv)
            if not args.domain:
                parser.print_help()
            else:
                result = _run(parser, args)

    if profiler is not None:
        print(profiler.format_summary(), file=sys.stderr)
    return result


def cli_entry() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
