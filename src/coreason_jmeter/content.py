# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

"""Resolves the test plan to run from a content descriptor.

Content is expected to be materialized under the data directory already:
inline and file-uri content at ``<data_dir>/test-content``, git content under
``<data_dir>/repo``.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from coreason_jmeter.errors import PathNotFoundError, ScriptNotFoundInDirectoryError
from coreason_jmeter.models import ContentDescriptor, ContentType

TEST_CONTENT_DIR = "test-content"
REPO_DIR = "repo"
OUTPUT_DIR = "output"

_DIRECTORY_CONTENT_TYPES = (ContentType.GIT_DIR, ContentType.GIT)


@dataclass(frozen=True)
class ResolvedRun:
    """Paths for a single JMeter run.

    Attributes:
        script_path: Absolute path of the ``.jmx`` test plan.
        working_dir: Absolute directory JMeter runs in.
        args: Execution arguments to forward to JMeter.
    """

    script_path: Path
    working_dir: Path
    args: tuple[str, ...] = field(default_factory=tuple)

    @property
    def output_dir(self) -> Path:
        return self.working_dir / OUTPUT_DIR

    @property
    def jtl_path(self) -> Path:
        return self.output_dir / "report.jtl"

    @property
    def report_dir(self) -> Path:
        return self.output_dir / "report"


def _join(base: Path, *parts: str) -> Path:
    # Repository paths are always relative to the checkout.
    return base.joinpath(*(p.strip("/") for p in parts if p))


def resolve(
    content: ContentDescriptor | None, data_dir: str | Path, args: list[str] | tuple[str, ...] = ()
) -> ResolvedRun:
    """Computes the script path and working directory for an execution.

    When git directory content resolves to a directory, the last execution
    argument names the script inside it and is removed from the forwarded
    arguments.

    Args:
        content: The content descriptor of the execution.
        data_dir: Root directory the content was fetched into.
        args: The execution arguments.

    Returns:
        ResolvedRun: The resolved paths and the arguments left to forward.

    Raises:
        PathNotFoundError: If there is no content or the content path does not exist.
        ScriptNotFoundInDirectoryError: If no regular script file could be located.
    """
    if content is None:
        raise PathNotFoundError("execution has no test content")

    base = Path(os.path.abspath(data_dir))
    repository = content.repository
    working_dir = ""

    if content.is_git:
        path = _join(base, REPO_DIR)
        if repository is not None:
            path = _join(path, repository.path)
            working_dir = repository.working_dir
    else:
        path = base / TEST_CONTENT_DIR

    try:
        path.stat()
    except OSError as e:
        raise PathNotFoundError(f"test content path {path} not found: {e}") from e

    forwarded = tuple(args)
    if path.is_dir():
        if content.type not in _DIRECTORY_CONTENT_TYPES:
            raise ScriptNotFoundInDirectoryError(
                f"expected a test file for {content.type.value} content, got directory {path}"
            )
        if not forwarded:
            raise ScriptNotFoundInDirectoryError(f"no script name given for directory {path}")

        script_name = forwarded[-1]
        forwarded = forwarded[:-1]
        if working_dir:
            script_path = _join(base, REPO_DIR, working_dir, repository.path if repository else "", script_name)
        else:
            script_path = path / script_name

        logger.info(
            f"Directory test - looking for file from the last executor argument {script_name} in directory {path}"
        )
        if not script_path.is_file():
            raise ScriptNotFoundInDirectoryError(f"could not find file {script_name} in the directory {path}")
        path = script_path

    run_dir = _join(base, REPO_DIR, working_dir) if working_dir else base
    return ResolvedRun(script_path=path, working_dir=run_dir, args=forwarded)
