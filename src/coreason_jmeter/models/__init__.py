# src/coreason_jmeter/models/__init__.py

"""
Data models for JMeter executions and their results.
"""

from .execution import ContentDescriptor, ContentType, Execution, Repository, Variable
from .result import AssertionResult, ExecutionResult, ExecutionStatus, StepResult

__all__ = [
    "AssertionResult",
    "ContentDescriptor",
    "ContentType",
    "Execution",
    "ExecutionResult",
    "ExecutionStatus",
    "Repository",
    "StepResult",
    "Variable",
]
