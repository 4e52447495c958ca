# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

import sys
from pathlib import Path

from loguru import logger

LOG_FILE = "app.log"


def configure_logging(level: str = "INFO", log_dir: str | Path = "logs") -> None:
    """Configures loguru with a stderr sink and a JSON file sink.

    Args:
        level: Minimum level for both sinks.
        log_dir: Directory for the rotating ``app.log`` file; created if missing.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, level=level, colorize=True)
    logger.add(
        log_path / LOG_FILE,
        level=level,
        rotation="10 MB",
        retention="7 days",
        serialize=True,
        enqueue=True,
    )
