"""Canonical directory layout of a generated project."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ProjectPaths:
    """Derived locations inside a project root."""

    base_dir: str
    root: str
    app_dir: str
    config_dir: str
    wp_content: str
    plugins: str
    uploads: str
    themes: str
    database_sql: str


def new_project_paths(base_dir: str, project_name: str) -> ProjectPaths:
    """Build the project layout for project_name under base_dir."""
    root = os.path.join(base_dir, project_name)
    app = os.path.join(root, "app")
    wp_content = os.path.join(app, "wp-content")
    return ProjectPaths(
        base_dir=base_dir,
        root=root,
        app_dir=app,
        config_dir=os.path.join(root, "config"),
        wp_content=wp_content,
        plugins=os.path.join(wp_content, "plugins"),
        uploads=os.path.join(wp_content, "uploads"),
        themes=os.path.join(wp_content, "themes"),
        database_sql=os.path.join(app, "database.sql"),
    )