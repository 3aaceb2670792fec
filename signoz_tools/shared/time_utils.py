"""
Time range resolution for tool calls.
"""

import logging
import time

from ..client import SigNozAPIError, SigNozClient
from ..utils import format_timestamp, parse_timestamp, safe_get
from .models import TimeRange
from .query_builder import build_payload, make_default_query

logger = logging.getLogger("signoz_tools.time_utils")

SEARCH_WINDOW_SECONDS = 30 * 60
AGGREGATE_WINDOW_SECONDS = 60 * 60
SERVICES_WINDOW_SECONDS = 24 * 60 * 60


def _now_ms(now: float | None) -> int:
    return int((time.time() if now is None else now) * 1000)


def trailing_window(window_seconds: int, now: float | None = None) -> TimeRange:
    """Window of ``window_seconds`` ending at ``now`` (Unix seconds, default: current time)."""
    end_ms = _now_ms(now)
    return TimeRange(start_ms=end_ms - window_seconds * 1000, end_ms=end_ms)


def resolve_time_range(
    start_unix: int | None,
    end_unix: int | None,
    window_seconds: int,
    now: float | None = None,
) -> TimeRange:
    """Use caller bounds where given, else fall back per bound to a trailing window.

    Args:
        start_unix: Start in Unix seconds, or None.
        end_unix: End in Unix seconds, or None.
        window_seconds: Length of the default window.
        now: Current time in Unix seconds (for tests).
    """
    default = trailing_window(window_seconds, now)
    return TimeRange(
        start_ms=start_unix * 1000 if start_unix is not None else default.start_ms,
        end_ms=end_unix * 1000 if end_unix is not None else default.end_ms,
    )


def _last_hour(now: float | None) -> TimeRange:
    end_unix = _now_ms(now) // 1000
    return TimeRange.from_unix(end_unix - AGGREGATE_WINDOW_SECONDS, end_unix)


async def detect_latest_log_range(client: SigNozClient, now: float | None = None) -> TimeRange:
    """Find a one-hour window ending at the most recent log.

    Issues a single list query for the newest log. Falls back to the last
    hour when there are no logs or the probe fails; never raises.
    """
    logger.info("No time range provided. Auto-detecting latest log time...")

    probe = build_payload(
        TimeRange(start_ms=0, end_ms=_now_ms(now)),
        step=0,
        panel_type="list",
        query=make_default_query("logs", page_size=1, aggregate_operator="noop"),
    )

    try:
        response = await client.query_range(probe)
        latest_log = safe_get(response, "data", "result", 0, "list", 0)
        if not latest_log:
            logger.info("No logs found while auto-detecting, defaulting to last hour.")
            return _last_hour(now)

        latest_ms = int(parse_timestamp(latest_log["timestamp"]).timestamp() * 1000)
    except (SigNozAPIError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Failed to auto-detect time, defaulting to last hour: {e}")
        return _last_hour(now)

    end_unix = latest_ms // 1000
    time_range = TimeRange.from_unix(end_unix - AGGREGATE_WINDOW_SECONDS, end_unix)
    logger.info(
        f"Auto-detected time range: {format_timestamp(time_range.start_ms)} to {format_timestamp(time_range.end_ms)}"
    )
    return time_range
