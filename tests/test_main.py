from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from coreason_jmeter import main
from coreason_jmeter.errors import PathNotFoundError
from coreason_jmeter.models import ExecutionResult, ExecutionStatus


@pytest.fixture
def mock_runner() -> Any:
    with patch.object(main, "runner") as mock:
        mock.run = AsyncMock(return_value=ExecutionResult(status=ExecutionStatus.PASSED, output="ok"))
        yield mock


@pytest.mark.asyncio
async def test_run_test_returns_result_by_alias(mock_runner: Any) -> None:
    response = await main.run_test({"id": "exec-1", "content": {"type": "string"}})

    assert response["status"] == "passed"
    assert response["outputType"] == "text/plain"
    execution = mock_runner.run.await_args.args[0]
    assert execution.id == "exec-1"


@pytest.mark.asyncio
async def test_run_test_invalid_payload(mock_runner: Any) -> None:
    response = await main.run_test({"content": {"type": "svn"}})

    assert response["error"].startswith("Error running test:")
    mock_runner.run.assert_not_awaited()


@pytest.mark.asyncio
async def test_run_test_fatal_error(mock_runner: Any) -> None:
    mock_runner.run.side_effect = PathNotFoundError("test content path /data/test-content not found")

    response = await main.run_test({"content": {"type": "string"}})

    assert response == {"error": "Error running test: test content path /data/test-content not found"}


def test_main_configures_logging_and_runs_server() -> None:
    with (
        patch.object(main, "configure_logging") as configure_logging,
        patch.object(main.mcp, "run") as run,
    ):
        main.main()

    configure_logging.assert_called_once_with(main.config.log_level)
    run.assert_called_once()
