"""Structured logging for pagination operations.

This module provides telemetry hooks for paged sequences, the cursor
registry and row squashing, emitting structured logs for observability.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    source: str,
    skip: int,
    rows: int,
    latency_ms: float | None = None,
) -> None:
    """Log a completed page fetch.

    Args:
        source: Description of the page source (endpoint path or loader)
        skip: Number of elements already received before this page
        rows: Number of elements returned by this page
        latency_ms: Latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={"source": source, "skip": skip, "rows": rows, "latency_ms": latency_ms},
    )


def log_sequence_exhausted(*, source: str, received: int) -> None:
    """Log that a source returned no more rows."""
    logger.debug("sequence_exhausted", extra={"source": source, "received": received})


def log_page_error(*, source: str, skip: int, error_type: str, error_message: str) -> None:
    """Log a failed page fetch.

    Args:
        source: Description of the page source
        skip: Number of elements already received
        error_type: Exception class name
        error_message: Exception message
    """
    logger.error(
        "page_error",
        extra={
            "source": source,
            "skip": skip,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_cursor_opened(*, cursor_id: str) -> None:
    logger.debug("cursor_opened", extra={"cursor_id": cursor_id})


def log_cursor_closed(*, cursor_id: str, received: int) -> None:
    logger.debug("cursor_closed", extra={"cursor_id": cursor_id, "received": received})


def log_rows_squashed(
    *,
    cursor_id: str,
    groups: int,
    rows_consumed: int,
    withheld: str | None,
) -> None:
    """Log the outcome of one squash call.

    Args:
        cursor_id: Cursor the page belongs to
        groups: Number of entities emitted
        rows_consumed: Rows counted toward the cursor's skip offset
        withheld: Join key of the trailing group held back, if any
    """
    logger.debug(
        "rows_squashed",
        extra={
            "cursor_id": cursor_id,
            "groups": groups,
            "rows_consumed": rows_consumed,
            "withheld": withheld,
        },
    )


def log_group_split_forced(*, cursor_id: str, join_key: str, rows: int) -> None:
    """Log that a full page held a single group and was emitted anyway.

    The remaining rows of that entity will arrive as a separate entity on
    the next page.
    """
    logger.warning(
        "group_split_forced",
        extra={"cursor_id": cursor_id, "join_key": join_key, "rows": rows},
    )


def log_group_not_contiguous(*, cursor_id: str, join_key: str, rows: int) -> None:
    """Log that a withheld entity's rows also appeared earlier on the page.

    The service did not return the entity's rows adjacently, so it is
    delivered as more than one entity.
    """
    logger.warning(
        "group_not_contiguous",
        extra={"cursor_id": cursor_id, "join_key": join_key, "rows": rows},
    )
