# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

import subprocess
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

import anyio
from loguru import logger

from coreason_jmeter.errors import ProcessInvocationError


class ProcessInvoker(Protocol):
    """Protocol for running an external command to completion."""

    async def run(self, working_dir: Path, command: str, env: Mapping[str, str], *args: str) -> bytes:
        """Runs the command and returns its combined stdout/stderr.

        Args:
            working_dir: Directory to run the command in.
            command: The executable to run.
            env: The full process environment.
            *args: Command arguments.

        Returns:
            bytes: Combined process output.

        Raises:
            ProcessInvocationError: If the command cannot start or exits non-zero.
        """
        ...


class AnyioProcessInvoker:
    """Runs commands as local subprocesses through anyio."""

    async def run(self, working_dir: Path, command: str, env: Mapping[str, str], *args: str) -> bytes:
        logger.info(f"Running {command} in {working_dir}")
        try:
            completed = await anyio.run_process(
                [command, *args],
                cwd=working_dir,
                env=dict(env),
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as e:
            logger.error(f"Failed to launch {command}: {e}")
            raise ProcessInvocationError(f"could not start {command}: {e}") from e

        output = completed.stdout or b""
        if completed.returncode != 0:
            logger.warning(f"{command} exited with code {completed.returncode}")
            raise ProcessInvocationError(
                f"{command} exited with code {completed.returncode}",
                output=output,
                exit_code=completed.returncode,
            )

        return output
