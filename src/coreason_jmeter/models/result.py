# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

OUTPUT_TYPE_TEXT = "text/plain"


class ExecutionStatus(str, Enum):
    """Canonical pass/fail status."""

    PASSED = "passed"
    FAILED = "failed"


class AssertionResult(BaseModel):
    """A single assertion recorded against a step."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    status: ExecutionStatus


class StepResult(BaseModel):
    """Represents one JMeter sample mapped to an execution step.

    Attributes:
        name: The sample label.
        duration: Human readable elapsed time (e.g. ``150ms``, ``1.5s``).
        status: The step status.
        assertion_results: Assertions recorded for the step.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    duration: str
    status: ExecutionStatus
    assertion_results: list[AssertionResult] = Field(default_factory=list)


class ExecutionResult(BaseModel):
    """Represents the normalized result of a JMeter execution.

    Attributes:
        status: Passed unless the report (or the run itself) recorded a failure.
        output: The obfuscated JMeter process output.
        output_type: Always ``text/plain``.
        error_message: The last failure message, set only for failed results.
        steps: One step per report sample, in report order.
        errors: Non-fatal errors attached after the result was assembled.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    status: ExecutionStatus
    output: str = ""
    output_type: str = OUTPUT_TYPE_TEXT
    error_message: str | None = None
    steps: list[StepResult] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def failed(cls, message: str, output: str = "") -> "ExecutionResult":
        """Builds a failed result carrying no steps."""
        return cls(status=ExecutionStatus.FAILED, output=output, error_message=message)

    def with_errors(self, *errors: BaseException | str) -> "ExecutionResult":
        """Returns a copy of the result with the given errors attached."""
        return self.model_copy(update={"errors": [*self.errors, *(str(e) for e in errors)]})
