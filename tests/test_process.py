import os
import subprocess
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from coreason_jmeter.errors import ProcessInvocationError
from coreason_jmeter.process import AnyioProcessInvoker


@pytest.mark.asyncio
async def test_run_passes_command_cwd_and_env(tmp_path: Path) -> None:
    completed = subprocess.CompletedProcess(args=[], returncode=0, stdout=b"done", stderr=None)
    with patch("coreason_jmeter.process.anyio.run_process", AsyncMock(return_value=completed)) as run_process:
        output = await AnyioProcessInvoker().run(tmp_path, "jmeter", {"A": "1"}, "-n", "-t", "plan.jmx")

    assert output == b"done"
    run_process.assert_awaited_once_with(
        ["jmeter", "-n", "-t", "plan.jmx"],
        cwd=tmp_path,
        env={"A": "1"},
        stderr=subprocess.STDOUT,
        check=False,
    )


@pytest.mark.asyncio
async def test_run_merges_stdout_and_stderr(tmp_path: Path) -> None:
    output = await AnyioProcessInvoker().run(tmp_path, "sh", dict(os.environ), "-c", "echo out; echo err >&2")
    assert output == b"out\nerr\n"


@pytest.mark.asyncio
async def test_run_uses_working_dir(tmp_path: Path) -> None:
    output = await AnyioProcessInvoker().run(tmp_path, "sh", dict(os.environ), "-c", "pwd")
    assert Path(output.decode().strip()).resolve() == tmp_path.resolve()


@pytest.mark.asyncio
async def test_run_non_zero_exit_keeps_output(tmp_path: Path) -> None:
    with pytest.raises(ProcessInvocationError) as exc_info:
        await AnyioProcessInvoker().run(tmp_path, "sh", dict(os.environ), "-c", "echo partial; exit 3")

    assert exc_info.value.exit_code == 3
    assert exc_info.value.output == b"partial\n"


@pytest.mark.asyncio
async def test_run_launch_failure(tmp_path: Path) -> None:
    with pytest.raises(ProcessInvocationError, match="could not start") as exc_info:
        await AnyioProcessInvoker().run(tmp_path, str(tmp_path / "no-such-jmeter"), dict(os.environ))

    assert exc_info.value.exit_code is None
    assert exc_info.value.output == b""
