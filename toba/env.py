"""Global configuration file: location, parsing and initialization."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path

from toba.config import ProjectConfig

ENV_FILE_NAME = ".env"
ENV_EXAMPLE_FILE_NAME = ".env.example"
GLOBAL_CONFIG_DIR_NAME = "toba"
EMBEDDED_TEMPLATE_SOURCE = "embedded:.env.example"

ENV_TEMPLATE = (
    b"TOBA_PHP_VERSION=\n"
    b"TOBA_STARTER_REPO=\n"
    b"TOBA_SSH_TARGET=\n"
    b"TOBA_REMOTE_WORDPRESS_ROOT=\n"
)

_PROJECT_NAME_LINE = re.compile(r"""^\s*name\s*=\s*["']toba["']\s*$""", re.MULTILINE)


@dataclass(frozen=True)
class EnvInitialization:
    """What `toba config` should write, where it comes from and where it goes."""

    content: bytes
    source_path: str
    target_path: str
    from_template: bool


def _user_config_dir() -> str:
    if sys.platform == "win32":
        app_data = os.environ.get("APPDATA", "")
        if not app_data:
            raise OSError("%AppData% is not defined")
        return app_data

    if sys.platform == "darwin":
        home = os.environ.get("HOME", "")
        if not home:
            raise OSError("$HOME is not defined")
        return os.path.join(home, "Library", "Application Support")

    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        if not os.path.isabs(xdg):
            raise OSError("path in $XDG_CONFIG_HOME is relative")
        return xdg
    home = os.environ.get("HOME", "")
    if not home:
        raise OSError("neither $XDG_CONFIG_HOME nor $HOME are defined")
    return os.path.join(home, ".config")


def global_env_path() -> str:
    """Return the path of the shared config file in the user's config directory."""
    return os.path.join(_user_config_dir(), GLOBAL_CONFIG_DIR_NAME, ENV_FILE_NAME)


def load_env_file(path: str) -> dict[str, str]:
    """Parse a KEY=VALUE file; a missing file yields an empty mapping.

    Raises ValueError for a line that is not a comment and has no '='.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}

    values: dict[str, str] = {}
    for line_no, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        line = line.removeprefix("export ")
        key, sep, value = line.partition("=")
        if not sep:
            raise ValueError(f"{path}:{line_no}: invalid env entry")
        values[key.strip()] = value.strip().strip("\"'")
    return values


def resolve_env_config() -> tuple[ProjectConfig, str]:
    """Load the global config file.

    Returns the parsed config and the file's path, or an empty config and an
    empty path when the file does not exist.
    """
    env_path = global_env_path()
    try:
        os.stat(env_path)
    except FileNotFoundError:
        return ProjectConfig(), ""

    values = load_env_file(env_path)
    config = ProjectConfig(
        php_version=values.get("TOBA_PHP_VERSION", ""),
        database=values.get("TOBA_DATABASE", ""),
        starter_repo=values.get("TOBA_STARTER_REPO", ""),
        ssh_target=values.get("TOBA_SSH_TARGET", ""),
        remote_wordpress_root=values.get("TOBA_REMOTE_WORDPRESS_ROOT", ""),
    )
    return config, env_path


def load_env_config() -> ProjectConfig:
    """Load the global config file and return only the parsed config."""
    config, _ = resolve_env_config()
    return config


def _is_source_root(directory: str) -> bool:
    try:
        text = Path(directory, "pyproject.toml").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return False
    if not _PROJECT_NAME_LINE.search(text):
        return False
    return Path(directory, "toba", "cli.py").exists()


def _resolve_source(source_dir: str) -> tuple[bytes, str, bool]:
    if _is_source_root(source_dir):
        for file_name in (ENV_FILE_NAME, ENV_EXAMPLE_FILE_NAME):
            source_path = os.path.join(source_dir, file_name)
            try:
                content = Path(source_path).read_bytes()
            except FileNotFoundError:
                continue
            return content, source_path, file_name == ENV_EXAMPLE_FILE_NAME

    return ENV_TEMPLATE, EMBEDDED_TEMPLATE_SOURCE, True


def resolve_global_env_initialization(source_dir: str) -> EnvInitialization:
    """Choose what to write as the global config.

    Inside the package's own source tree a local .env, then .env.example, is
    preferred; otherwise the built-in template is used.
    """
    target_path = global_env_path()
    content, source_path, from_template = _resolve_source(source_dir)
    return EnvInitialization(
        content=content,
        source_path=source_path,
        target_path=target_path,
        from_template=from_template,
    )


def write_global_env(target_path: str, content: bytes) -> None:
    """Write the global config file, creating its directory when needed.

    Raises PermissionError with a message naming target_path when access is denied.
    """
    target = Path(target_path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    except PermissionError as exc:
        raise PermissionError(
            f"cannot write global config at {target_path}: permission denied"
        ) from exc