"""The `toba config` command: initialize the shared global configuration."""

from __future__ import annotations

import os
import sys
from typing import TextIO

from toba.env import (
    EMBEDDED_TEMPLATE_SOURCE,
    resolve_global_env_initialization,
    write_global_env,
)
from toba.logger import ConsoleLogger


def run_config(
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    cwd: str | None = None,
) -> None:
    """Write the global config, asking before overwriting an existing one."""
    source_dir = cwd if cwd is not None else os.getcwd()
    init = resolve_global_env_initialization(source_dir)
    target = init.target_path
    logger = ConsoleLogger(stdout)

    try:
        os.stat(target)
    except FileNotFoundError:
        pass
    else:
        logger.prompt(f"Overwrite existing global config at {target}? [y/N]: ")
        stream = stdin if stdin is not None else sys.stdin
        answer = stream.readline()
        if answer == "":
            logger.info(f"No confirmation received; skipped updating global config: {target}")
            return
        if answer.strip().lower() not in ("y", "yes"):
            logger.info(f"Skipped updating global config: {target}")
            return

    write_global_env(target, init.content)

    if init.from_template:
        if init.source_path == EMBEDDED_TEMPLATE_SOURCE:
            logger.info(f"Created global config from embedded .env.example: {target}")
        else:
            logger.info(f"Created global config from {init.source_path}: {target}")
        logger.info(f"Fill in the required values in {target}")
        return

    logger.info(f"Copied config from {init.source_path} to {target}")