"""Shared state passed between the steps of the create workflow."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Protocol

from toba.config import ProjectConfig
from toba.logger import Logger
from toba.paths import ProjectPaths, new_project_paths


class CommandRunner(Protocol):
    def run(self, directory: str, cmd: str, *args: str) -> None: ...


def _empty_paths() -> ProjectPaths:
    return ProjectPaths(
        base_dir="",
        root="",
        app_dir="",
        config_dir="",
        wp_content="",
        plugins="",
        uploads="",
        themes="",
        database_sql="",
    )


@dataclass
class StarterData:
    """Where the starter site's data comes from and where it was staged."""

    mode: str = ""
    temp_dir: str = ""
    database_path: str = ""
    plugins_paths: list[str] = field(default_factory=list)
    uploads_paths: list[str] = field(default_factory=list)
    others_paths: list[str] = field(default_factory=list)
    theme_paths: list[str] = field(default_factory=list)
    source_url: str = ""


@dataclass
class Context:
    """Mutable state of a single create run."""

    config: ProjectConfig = field(default_factory=ProjectConfig)
    dry_run: bool = False
    logger: Logger | None = None
    runner: CommandRunner | None = None
    paths: ProjectPaths = field(default_factory=_empty_paths)
    starter_data: StarterData = field(default_factory=StarterData)
    project_created: bool = False
    use_existing_project_dir: bool = False


def new_context(
    base_dir: str,
    config: ProjectConfig,
    logger: Logger | None,
    runner: CommandRunner | None,
) -> Context:
    """Create a context for a project named by config under base_dir."""
    own_config = dataclasses.replace(config)
    return Context(
        config=own_config,
        dry_run=own_config.dry_run,
        logger=logger,
        runner=runner,
        paths=new_project_paths(base_dir, own_config.name),
    )