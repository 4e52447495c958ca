from pathlib import Path
from typing import Any, Generator
from unittest.mock import patch

import pytest
from coreason_jmeter.config import RunnerConfig
from coreason_jmeter.errors import ProcessInvocationError

PASSING_JTL = b"""<?xml version="1.0" encoding="UTF-8"?>
<testResults version="1.2">
<httpSample t="120" lt="100" ts="1700000000000" s="true" lb="Home page" rc="200" rm="OK"/>
<httpSample t="1500" lt="900" ts="1700000000200" s="true" lb="Login" rc="200" rm="OK"/>
<httpSample t="45" lt="40" ts="1700000001800" s="true" lb="Logout" rc="200" rm="OK"/>
</testResults>
"""

FAILING_JTL = b"""<?xml version="1.0" encoding="UTF-8"?>
<testResults version="1.2">
<httpSample t="120" lt="100" ts="1700000000000" s="true" lb="Home page" rc="200" rm="OK"/>
<httpSample t="80" lt="70" ts="1700000000200" s="false" lb="Checkout" rc="500" rm="Internal Server Error">
  <assertionResult>
    <name>Response Assertion</name>
    <failure>true</failure>
    <error>false</error>
    <failureMessage>assertion failed</failureMessage>
  </assertionResult>
</httpSample>
</testResults>
"""


class FakeInvoker:
    """Process invoker that writes a canned JTL report instead of running JMeter."""

    def __init__(
        self,
        report: bytes | None = PASSING_JTL,
        output: bytes = b"jmeter output",
        error: ProcessInvocationError | None = None,
    ):
        self.report = report
        self.output = output
        self.error = error
        self.calls: list[tuple[Path, str, dict[str, str], tuple[str, ...]]] = []

    async def run(self, working_dir: Path, command: str, env: Any, *args: str) -> bytes:
        self.calls.append((working_dir, command, dict(env), args))
        if self.report is not None:
            jtl_path = Path(args[args.index("-l") + 1])
            jtl_path.write_bytes(self.report)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    with patch.dict("os.environ", {}, clear=True):
        yield


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def string_content(data_dir: Path) -> Path:
    script = data_dir / "test-content"
    script.write_text("<jmeterTestPlan/>")
    return script


@pytest.fixture
def config(data_dir: Path, clean_env: None) -> RunnerConfig:
    return RunnerConfig(data_dir=str(data_dir), _env_file=None)  # type: ignore[call-arg]
