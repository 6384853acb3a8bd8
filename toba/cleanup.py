"""Interactive cleanup of a project directory left by a failed create run."""

from __future__ import annotations

import os
import shutil
import sys
from typing import TextIO

from toba.context import Context


def cleanup_failed_install(ctx: Context | None, stdin: TextIO | None = None) -> None:
    """Offer to delete the project directory created by a failed run."""
    if ctx is None or ctx.dry_run or not ctx.project_created:
        return

    root = ctx.paths.root
    if not os.path.exists(root):
        return

    stream = stdin if stdin is not None else sys.stdin
    ctx.logger.prompt(f"Delete failed installation at {root}? [y/N]: ")
    answer = stream.readline()
    if answer == "":
        ctx.logger.info("")
        return

    if answer.strip().lower() not in ("y", "yes"):
        return

    try:
        destroy_lando_app(ctx)
    except Exception as exc:
        ctx.logger.error(f"Failed to destroy Lando app in {root}: {exc}")
        ctx.logger.error(
            "Keeping project directory because removing it now could make manual "
            f"Lando cleanup harder: {root}"
        )
        return

    try:
        shutil.rmtree(root)
    except OSError as exc:
        ctx.logger.warning(f"Failed to remove {root}: {exc}")
        return

    ctx.logger.success(f"Removed failed installation: {root}")


def destroy_lando_app(ctx: Context) -> None:
    """Run `lando destroy -y` in the project root when it holds a .lando.yml."""
    root = ctx.paths.root
    try:
        os.stat(os.path.join(root, ".lando.yml"))
    except FileNotFoundError:
        return

    ctx.logger.info(f"Destroying Lando app in {root}")
    ctx.runner.run(root, "lando", "destroy", "-y")