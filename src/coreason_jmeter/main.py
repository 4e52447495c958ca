# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

from typing import Any

from loguru import logger
from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from coreason_jmeter.config import RunnerConfig
from coreason_jmeter.errors import RunnerError
from coreason_jmeter.models import Execution
from coreason_jmeter.runner import JMeterRunnerAsync
from coreason_jmeter.utils.logger import configure_logging

# Initialize Runner
config = RunnerConfig()
runner = JMeterRunnerAsync(config)

# Initialize MCP Server
mcp = FastMCP("coreason-jmeter")


@mcp.tool()  # type: ignore[misc]
async def run_test(execution: dict[str, Any]) -> dict[str, Any]:
    """
    Run a JMeter test execution.
    Returns the execution result with one step per JMeter sample.
    """
    try:
        request = Execution.model_validate(execution)
        result = await runner.run(request)
    except (ValidationError, RunnerError) as e:
        logger.error(f"Execution failed: {e}")
        return {"error": f"Error running test: {e!s}"}

    return result.model_dump(mode="json", by_alias=True)


def main() -> None:
    """Entry point for the MCP server."""
    configure_logging(config.log_level)
    mcp.run()


if __name__ == "__main__":  # pragma: no cover
    main()
