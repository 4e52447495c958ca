# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

"""
coreason-jmeter
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .config import RunnerConfig
from .models import Execution, ExecutionResult, ExecutionStatus
from .parser import ParseOutcome, ReportRecord, parse
from .runner import JMeterRunner, JMeterRunnerAsync

__all__ = [
    "Execution",
    "ExecutionResult",
    "ExecutionStatus",
    "JMeterRunner",
    "JMeterRunnerAsync",
    "ParseOutcome",
    "ReportRecord",
    "RunnerConfig",
    "parse",
]
