"""Command-line entry point."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import TextIO

from toba.config_command import run_config
from toba.env import resolve_env_config
from toba.logger import ConsoleLogger
from toba.paths import new_project_paths
from toba.version import run_version

USAGE_BANNER = """
░▒▓████████▓▒░▒▓██████▓▒░░▒▓███████▓▒░ ░▒▓██████▓▒░
   ░▒▓█▓▒░  ░▒▓█▓▒░░▒▓█▓▒░▒▓█▓▒░░▒▓█▓▒░▒▓█▓▒░░▒▓█▓▒░
   ░▒▓█▓▒░  ░▒▓█▓▒░░▒▓█▓▒░▒▓█▓▒░░▒▓█▓▒░▒▓█▓▒░░▒▓█▓▒░
   ░▒▓█▓▒░  ░▒▓█▓▒░░▒▓█▓▒░▒▓███████▓▒░░▒▓████████▓▒░
   ░▒▓█▓▒░  ░▒▓█▓▒░░▒▓█▓▒░▒▓█▓▒░░▒▓█▓▒░▒▓█▓▒░░▒▓█▓▒░
   ░▒▓█▓▒░  ░▒▓█▓▒░░▒▓█▓▒░▒▓█▓▒░░▒▓█▓▒░▒▓█▓▒░░▒▓█▓▒░
   ░▒▓█▓▒░   ░▒▓██████▓▒░░▒▓███████▓▒░░▒▓█▓▒░░▒▓█▓▒░
"""

CREATE_USAGE = (
    "Usage: toba create [project-name] [--php=8.4] "
    "[--starter-repo=git@example.com:org/repo.git] "
    "[--ssh-target='user@host -p port'] "
    "[--remote-wordpress-root='www/example.com'] [--dry-run]"
)

_STRING_FLAGS = {
    "php": "php_version",
    "starter-repo": "starter_repo",
    "ssh-target": "ssh_target",
    "remote-wordpress-root": "remote_wordpress_root",
}
_BOOL_FLAGS = {"dry-run": "dry_run"}
_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class UsageError(ValueError):
    """Raised for malformed command-line arguments."""


@dataclass
class CreateOptions:
    """Options given to the create command."""

    name: str = ""
    php_version: str = ""
    starter_repo: str = ""
    ssh_target: str = ""
    remote_wordpress_root: str = ""
    dry_run: bool = False


def _parse_bool(name: str, value: str) -> bool:
    if value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    raise UsageError(f'invalid boolean value "{value}" for -{name}: parse error')


def _parse_flags(args: list[str], options: CreateOptions) -> list[str]:
    """Consume leading flags into options; return the arguments left over."""
    remaining = list(args)
    while remaining:
        arg = remaining[0]
        if len(arg) < 2 or not arg.startswith("-"):
            break
        remaining.pop(0)
        if arg == "--":
            break

        body = arg[2:] if arg.startswith("--") else arg[1:]
        if not body or body[0] in "-=":
            raise UsageError(f"bad flag syntax: {arg}")
        name, has_value, value = body.partition("=")

        if name in _BOOL_FLAGS:
            setattr(options, _BOOL_FLAGS[name], _parse_bool(name, value) if has_value else True)
        elif name in _STRING_FLAGS:
            if not has_value:
                if not remaining:
                    raise UsageError(f"flag needs an argument: -{name}")
                value = remaining.pop(0)
            setattr(options, _STRING_FLAGS[name], value)
        elif name in ("h", "help"):
            raise UsageError("flag: help requested")
        else:
            raise UsageError(f"flag provided but not defined: -{name}")
    return remaining


def parse_create_args(args: list[str]) -> CreateOptions:
    """Parse the arguments that follow `create`.

    The project name may come before or after the flags.
    """
    rest = list(args)
    name = ""
    if rest and rest[0] and not rest[0].startswith("-"):
        name = rest.pop(0)

    options = CreateOptions()
    remaining = _parse_flags(rest, options)
    if not name and remaining:
        name = remaining.pop(0)
    if remaining:
        raise UsageError(f"unexpected arguments: [{' '.join(remaining)}]")

    options.name = name
    return options


def _run_create(options: CreateOptions) -> None:
    logger = ConsoleLogger()
    config, env_path = resolve_env_config()
    if env_path:
        logger.info(f"Using config from {env_path}")

    if options.name:
        config.name = options.name
    if options.php_version:
        config.php_version = options.php_version
    if options.starter_repo:
        config.starter_repo = options.starter_repo
    if options.ssh_target:
        config.ssh_target = options.ssh_target
    if options.remote_wordpress_root:
        config.remote_wordpress_root = options.remote_wordpress_root
    config.dry_run = options.dry_run

    if not config.name.strip():
        raise UsageError(
            "project name is required; pass it as argument: toba create <project-name>"
        )

    config.normalize()
    paths = new_project_paths(os.getcwd(), config.name)
    logger.info(f"Project {config.name} at {paths.root}")
    logger.info(f"Domain: {config.domain}, PHP {config.php_version}")


def run_config_command(args: list[str]) -> None:
    """Run `toba config`, which takes no arguments."""
    if args:
        raise UsageError("usage: toba config")
    run_config()


def print_usage(out: TextIO | None = None) -> None:
    """Write the banner and the list of commands."""
    stream = out if out is not None else sys.stdout
    stream.write(USAGE_BANNER)
    stream.write("\n")
    stream.write("Usage: toba <command>\n")
    stream.write("\n")
    stream.write("Commands:\n")
    stream.write("  config   Initialize global configuration\n")
    stream.write("  create   Create a new project skeleton\n")
    stream.write("  version  Print the current version\n")


def main(argv: list[str] | None = None) -> int:
    """Dispatch a command and return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print_usage()
        return 0

    command, rest = args[0], args[1:]
    try:
        if command == "create":
            try:
                options = parse_create_args(rest)
            except UsageError:
                print(CREATE_USAGE, file=sys.stderr)
                raise
            _run_create(options)
        elif command == "config":
            run_config_command(rest)
        elif command == "version":
            run_version()
        else:
            print_usage()
            return 1
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())