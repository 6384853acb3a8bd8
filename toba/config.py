"""Project configuration and its normalization rules."""

from __future__ import annotations

import json
from dataclasses import dataclass

DEFAULT_PHP_VERSION = "8.4"
DEFAULT_DATABASE_NAME = "wordpress"

_WHITESPACE = " \t\r\n"
_ALLOWED_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-_")


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


@dataclass
class ProjectConfig:
    """Settings that describe the project to create."""

    name: str = ""
    php_version: str = ""
    domain: str = ""
    database: str = ""
    starter_repo: str = ""
    ssh_target: str = ""
    remote_wordpress_root: str = ""
    dry_run: bool = False

    def normalize(self) -> None:
        """Validate the name and fill derived defaults in place.

        Raises ValueError when the project name is empty or malformed.
        """
        self.name = self.name.strip().lower()
        if not self.name:
            raise ValueError("project name cannot be empty")
        if any(char in _WHITESPACE for char in self.name):
            raise ValueError(f"project name cannot contain spaces: {_quote(self.name)}")
        if any(char not in _ALLOWED_CHARS for char in self.name):
            raise ValueError(
                "project name can only contain lowercase letters, numbers, hyphens, "
                f"and underscores: {_quote(self.name)}"
            )

        if not self.php_version.strip():
            self.php_version = DEFAULT_PHP_VERSION
        self.remote_wordpress_root = self.remote_wordpress_root.strip()
        self.domain = f"{self.name.replace('_', '-')}.lndo.site"
        self.database = DEFAULT_DATABASE_NAME