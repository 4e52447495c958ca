# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

from datetime import timedelta

from coreason_jmeter.models import AssertionResult, ExecutionResult, ExecutionStatus, StepResult
from coreason_jmeter.parser import ParseOutcome, ReportRecord


def map_status(record: ReportRecord) -> ExecutionStatus:
    """Maps a report record to its canonical status."""
    if record.success:
        return ExecutionStatus.PASSED

    return ExecutionStatus.FAILED


def map_results_to_execution_result(output: bytes, outcome: ParseOutcome) -> ExecutionResult:
    """Builds the execution result from process output and the parsed report.

    Every record becomes one step, in report order. Each step carries a single
    assertion mirroring the step itself, since consumers expect at least one
    assertion per step.

    Args:
        output: The (already obfuscated) process output.
        outcome: The parsed JTL report.

    Returns:
        ExecutionResult: Failed iff the report holds a failed record.
    """
    steps = []
    for record in outcome.records:
        status = map_status(record)
        steps.append(
            StepResult(
                name=record.label,
                duration=format_duration(record.duration),
                status=status,
                assertion_results=[AssertionResult(name=record.label, status=status)],
            )
        )

    return ExecutionResult(
        status=ExecutionStatus.FAILED if outcome.has_error else ExecutionStatus.PASSED,
        output=output.decode("utf-8", errors="replace"),
        error_message=outcome.last_error_message if outcome.has_error else None,
        steps=steps,
    )


def format_duration(duration: timedelta) -> str:
    """Formats a duration as e.g. ``0s``, ``150ms``, ``1.5s`` or ``2m3.5s``."""
    millis = round(duration.total_seconds() * 1000)
    if millis == 0:
        return "0s"
    if millis < 1000:
        return f"{millis}ms"

    minutes, rest = divmod(millis, 60_000)
    seconds = f"{rest / 1000:g}s"
    if minutes:
        return f"{minutes}m{seconds}"
    return seconds
