# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

import os
import shutil
from pathlib import Path

import aiofiles  # type: ignore[import-untyped]
import anyio
from loguru import logger

from coreason_jmeter.config import RunnerConfig
from coreason_jmeter.content import ResolvedRun, resolve
from coreason_jmeter.env import EnvManager
from coreason_jmeter.errors import (
    OutputDirectoryError,
    ProcessInvocationError,
    ReportAccessError,
    ReportStructuralError,
    ScrapeError,
)
from coreason_jmeter.factory import UploaderFactory
from coreason_jmeter.mapper import map_results_to_execution_result
from coreason_jmeter.models import Execution, ExecutionResult
from coreason_jmeter.parser import parse
from coreason_jmeter.process import AnyioProcessInvoker, ProcessInvoker
from coreason_jmeter.scraper import (
    ArtifactUploader,
    FilesystemExtractor,
    Scraper,
    extract_cloud_meta,
    extract_minio_meta,
)

RUNNER_TYPE_MAIN = "main"


def prepare_output_dir(path: Path) -> None:
    """Recreates the output directory empty and world-writable.

    JMeter may run as a different user and must be able to write the report.

    Raises:
        OutputDirectoryError: If the directory cannot be created.
    """
    if path.exists():
        try:
            shutil.rmtree(path)
        except OSError as e:
            logger.warning(f"Failed to clean output directory {path}: {e}")

    try:
        path.mkdir()
        # mkdir's mode is narrowed by the umask.
        os.chmod(path, 0o777)
    except OSError as e:
        raise OutputDirectoryError(f"could not create directory {path}: {e}") from e


def compose_args(run: ResolvedRun, env_manager: EnvManager) -> list[str]:
    """Builds the JMeter command line: fixed flags, ``-J`` properties, then execution args."""
    args = ["-n", "-t", str(run.script_path), "-l", str(run.jtl_path), "-e", "-o", str(run.report_dir)]
    args.extend(env_manager.jmeter_properties())
    args.extend(run.args)
    return args


class JMeterRunnerAsync:
    """Async-native JMeter runner (The Core).

    Runs one execution end to end: resolve the test plan, run JMeter, parse the
    JTL report, build the result and scrape the output directory.
    """

    def __init__(
        self,
        config: RunnerConfig,
        invoker: ProcessInvoker | None = None,
        uploader: ArtifactUploader | None = None,
    ):
        """Initializes the runner.

        Args:
            config: Runner configuration, built once by the caller.
            invoker: Process invoker used to run JMeter.
            uploader: Artifact uploader; chosen from the config when omitted.
        """
        self.config = config
        self.invoker = invoker or AnyioProcessInvoker()
        self._uploader = uploader

    def get_type(self) -> str:
        """Returns the runner type."""
        return RUNNER_TYPE_MAIN

    async def run(self, execution: Execution) -> ExecutionResult:
        """Runs the execution and returns its result.

        A JMeter exit failure does not abort the run: the report is still read
        when present and the failure is attached to the result.

        Args:
            execution: The execution request.

        Returns:
            ExecutionResult: The mapped result.

        Raises:
            PathResolutionError: If the test plan cannot be located.
            OutputDirectoryError: If the output directory cannot be recreated.
            ReportAccessError: If JMeter succeeded but the report cannot be read.
            ReportStructuralError: If JMeter succeeded but the report is malformed.
        """
        logger.info(
            "Running with config",
            scraper_enabled=self.config.scraper_enabled,
            data_dir=self.config.data_dir,
            ssl=self.config.ssl,
            endpoint=self.config.endpoint,
        )

        execution = self._with_git_credentials(execution)
        env_manager = EnvManager(execution.variables)

        run = resolve(execution.content, self.config.data_dir, execution.args)
        prepare_output_dir(run.output_dir)

        args = compose_args(run, env_manager)
        logger.info(f"Using arguments: {env_manager.mask(' '.join(args))}")

        process_error: ProcessInvocationError | None = None
        try:
            output = await self.invoker.run(run.working_dir, self.config.jmeter_command, env_manager.environ(), *args)
        except ProcessInvocationError as e:
            logger.error(f"JMeter run error: {e}")
            process_error = e
            output = e.output
        output = env_manager.obfuscate_secrets(output)

        result = await self._collect_result(run, output, process_error)

        if self.config.scraper_enabled:
            result = await self._scrape(result, [run.output_dir], execution)

        return result

    async def _collect_result(
        self, run: ResolvedRun, output: bytes, process_error: ProcessInvocationError | None
    ) -> ExecutionResult:
        if process_error is not None and not run.jtl_path.exists():
            return ExecutionResult.failed(
                f"jmeter run error: {process_error}", output=output.decode("utf-8", errors="replace")
            )

        logger.info(f"Getting report {run.jtl_path}")
        try:
            async with aiofiles.open(run.jtl_path, "rb") as f:
                report = await f.read()
        except OSError as e:
            raise ReportAccessError(f"getting jtl report error: {e}") from e

        try:
            outcome = parse(report)
        except ReportStructuralError as e:
            if process_error is None:
                raise
            # A crashed run may leave a truncated report behind.
            logger.warning(f"Ignoring unreadable report of failed run: {e}")
            return ExecutionResult.failed(
                f"jmeter run error: {process_error}", output=output.decode("utf-8", errors="replace")
            ).with_errors(e)

        result = map_results_to_execution_result(output, outcome)
        logger.info(f"Mapped JMeter results to execution result: {result.status.value}, {len(result.steps)} steps")

        if process_error is not None:
            result = result.with_errors(f"jmeter run error: {process_error}")
        return result

    async def _scrape(self, result: ExecutionResult, directories: list[Path], execution: Execution) -> ExecutionResult:
        logger.info(f"Scraping directories: {directories}")
        meta = extract_cloud_meta(execution) if self.config.cloud_mode else extract_minio_meta(execution)

        try:
            uploader = self._uploader or UploaderFactory.get_uploader(self.config)
            await Scraper(FilesystemExtractor(directories), uploader).scrape(meta)
        except ScrapeError as e:
            return result.with_errors(f"scrape artifacts error: {e}")
        return result

    def _with_git_credentials(self, execution: Execution) -> Execution:
        username = self.config.git_username or ""
        token = self.config.git_token or ""
        content = execution.content
        if not (username or token) or content is None or content.repository is None:
            return execution

        repository = content.repository.model_copy(update={"username": username, "token": token})
        return execution.model_copy(update={"content": content.model_copy(update={"repository": repository})})


class JMeterRunner:
    """Sync Facade for JMeterRunnerAsync (The Facade).

    Wraps JMeterRunnerAsync and executes methods via anyio.run.
    """

    def __init__(
        self,
        config: RunnerConfig,
        invoker: ProcessInvoker | None = None,
        uploader: ArtifactUploader | None = None,
    ):
        self._async = JMeterRunnerAsync(config, invoker, uploader)

    def get_type(self) -> str:
        return self._async.get_type()

    def run(self, execution: Execution) -> ExecutionResult:
        """Runs the execution synchronously."""
        return anyio.run(self._async.run, execution)
