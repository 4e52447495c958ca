# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

"""Exceptions raised by the JMeter execution pipeline.

Fatal errors (path resolution, output directory, report access and report
structure) are raised to the caller. Process invocation and scrape errors are
attached to the returned ``ExecutionResult`` instead.
"""


class RunnerError(Exception):
    """Base class for all runner errors."""


class PathResolutionError(RunnerError, FileNotFoundError):
    """The test content or script could not be located under the data directory."""


class PathNotFoundError(PathResolutionError):
    """The content path computed from the content descriptor does not exist."""


class ScriptNotFoundInDirectoryError(PathResolutionError):
    """Directory content did not contain the script named by the last argument."""


class OutputDirectoryError(RunnerError):
    """The output directory could not be recreated."""


class ProcessInvocationError(RunnerError):
    """JMeter failed to launch or exited with a non-zero status.

    Attributes:
        output: Combined stdout/stderr captured before the failure.
        exit_code: Process exit code, or None if the process never started.
    """

    def __init__(self, message: str, output: bytes = b"", exit_code: int | None = None):
        super().__init__(message)
        self.output = output
        self.exit_code = exit_code


class ReportAccessError(RunnerError):
    """The JTL report is missing or unreadable after the run."""


class ReportStructuralError(RunnerError, ValueError):
    """The JTL report content is malformed."""


class ScrapeError(RunnerError):
    """Uploading output artifacts failed."""
