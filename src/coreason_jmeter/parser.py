# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_jmeter

"""Parser for JMeter JTL reports.

JMeter writes a JTL file either as XML (``<testResults>`` with one child element
per sample) or as CSV with a header row. Both are turned into an ordered
sequence of ``ReportRecord`` values.
"""

import codecs
import csv
import io
from dataclasses import dataclass
from datetime import timedelta
from typing import BinaryIO, Iterable
from xml.etree import ElementTree

from loguru import logger

from coreason_jmeter.errors import ReportStructuralError

XML_ROOT = "testResults"
CSV_REQUIRED_COLUMNS = ("label", "elapsed", "success")


@dataclass(frozen=True)
class ReportRecord:
    """A single sample from the JTL report.

    Attributes:
        label: The sampler label.
        duration: Elapsed time of the sample.
        success: Whether JMeter recorded the sample as successful.
        error: Failure detail, set only for failed samples.
    """

    label: str
    duration: timedelta
    success: bool
    error: str | None = None


@dataclass(frozen=True)
class ParseOutcome:
    """Aggregate over all records of a report."""

    records: tuple[ReportRecord, ...]
    has_error: bool
    last_error_message: str


def parse(source: bytes | BinaryIO) -> ParseOutcome:
    """Parses a JTL report into records.

    Args:
        source: The raw report bytes or a binary stream positioned at its start.

    Returns:
        ParseOutcome: Records in report order plus the error aggregate.

    Raises:
        ReportStructuralError: If the report is empty or malformed.
    """
    data = source if isinstance(source, bytes) else source.read()
    head = data.removeprefix(codecs.BOM_UTF8).lstrip()
    if not head:
        raise ReportStructuralError("JTL report is empty")

    if head.startswith(b"<"):
        records = _parse_xml(data)
    else:
        records = _parse_csv(data)

    outcome = _aggregate(records)
    logger.debug(f"Parsed {len(outcome.records)} JTL records, has_error={outcome.has_error}")
    return outcome


def _aggregate(records: Iterable[ReportRecord]) -> ParseOutcome:
    collected: list[ReportRecord] = []
    has_error = False
    last_error_message = ""
    for record in records:
        collected.append(record)
        if not record.success:
            has_error = True
            last_error_message = record.error or ""

    return ParseOutcome(records=tuple(collected), has_error=has_error, last_error_message=last_error_message)


def _parse_xml(data: bytes) -> list[ReportRecord]:
    try:
        root = ElementTree.fromstring(data)
    except ElementTree.ParseError as e:
        raise ReportStructuralError(f"invalid JTL report: {e}") from e

    if root.tag != XML_ROOT:
        raise ReportStructuralError(f"unexpected JTL root element <{root.tag}>, expected <{XML_ROOT}>")

    return [_xml_record(sample) for sample in root]


def _xml_record(sample: ElementTree.Element) -> ReportRecord:
    label = sample.get("lb", "")
    success = _is_success(sample.get("s"))
    return ReportRecord(
        label=label,
        duration=_elapsed(sample.get("t", "0")),
        success=success,
        error=None if success else _xml_error(sample, label),
    )


def _xml_error(sample: ElementTree.Element, label: str) -> str:
    for assertion in sample.findall("assertionResult"):
        failed = assertion.findtext("failure") == "true" or assertion.findtext("error") == "true"
        message = (assertion.findtext("failureMessage") or "").strip()
        if failed and message:
            return message

    return sample.get("rm") or f"{label} failed"


def _parse_csv(data: bytes) -> list[ReportRecord]:
    try:
        reader = csv.DictReader(io.StringIO(data.decode("utf-8-sig")))
        fieldnames = reader.fieldnames or []
        missing = [column for column in CSV_REQUIRED_COLUMNS if column not in fieldnames]
        if missing:
            raise ReportStructuralError(f"JTL report is missing columns: {', '.join(missing)}")
        return [_csv_record(row) for row in reader]
    except (UnicodeDecodeError, csv.Error) as e:
        raise ReportStructuralError(f"invalid JTL report: {e}") from e


def _csv_record(row: dict[str, str]) -> ReportRecord:
    label = row.get("label") or ""
    success = _is_success(row.get("success"))
    error = None
    if not success:
        error = row.get("failureMessage") or row.get("responseMessage") or f"{label} failed"

    return ReportRecord(label=label, duration=_elapsed(row.get("elapsed") or "0"), success=success, error=error)


def _is_success(value: str | None) -> bool:
    # Anything other than an explicit "true" counts as a failure.
    return value is not None and value.strip().lower() == "true"


def _elapsed(value: str) -> timedelta:
    try:
        return timedelta(milliseconds=int(value))
    except ValueError as e:
        raise ReportStructuralError(f"invalid elapsed time {value!r} in JTL report") from e
