"""
Video Planners.

Pure range and window arithmetic shared by the streaming endpoint and every
split front end (server-side transcoding or client-side capture).
Neither planner touches I/O or shared state, so both are safe to call from
concurrent requests.
"""

import math
import re
from numbers import Real
from typing import Optional, Tuple

from .errors import InvalidDuration, InvalidLength, InvalidPartCount
from .models import ByteRangePlan, RangeFailure, SegmentWindow


# HTTP byte positions are ASCII digits only
_RANGE_PATTERN = re.compile(r"^bytes=([0-9]+)-([0-9]*)$")


class RangePlanner:
    """Turns a resource length and a Range header into a ByteRangePlan"""

    def plan(self, total_length: int, raw_range_header: Optional[str] = None) -> ByteRangePlan:
        """
        Plan the byte window for one request.

        Args:
            total_length: Size of the resource at request time, must be > 0
            raw_range_header: Value of the Range header, or None when absent

        Returns:
            ByteRangePlan with status 200, 206 or 416

        Raises:
            InvalidLength: If total_length is not a positive integer
        """
        if isinstance(total_length, bool) or not isinstance(total_length, int) or total_length <= 0:
            raise InvalidLength(f"Resource length must be a positive integer, got {total_length!r}")

        if raw_range_header is None:
            return ByteRangePlan(
                total_length=total_length,
                status=200,
                start=0,
                end=total_length - 1,
                length=total_length,
                is_partial=False,
            )

        match = _RANGE_PATTERN.match(raw_range_header.strip())
        if not match:
            return self._unsatisfiable(total_length, RangeFailure.MALFORMED)

        start_digits, end_digits = match.groups()
        # Positions wider than the length itself are past the end; never int() them
        max_digits = len(str(total_length))
        start_digits = start_digits.lstrip("0") or "0"
        if len(start_digits) > max_digits:
            return self._unsatisfiable(total_length, RangeFailure.UNSATISFIABLE)

        start = int(start_digits)
        if end_digits:
            end_digits = end_digits.lstrip("0") or "0"
        if not end_digits or len(end_digits) > max_digits:
            end = total_length - 1
        else:
            end = int(end_digits)

        if start > end or start >= total_length:
            return self._unsatisfiable(total_length, RangeFailure.UNSATISFIABLE)

        # A client may ask past the end of the file; serve what exists
        end = min(end, total_length - 1)

        return ByteRangePlan(
            total_length=total_length,
            status=206,
            start=start,
            end=end,
            length=end - start + 1,
            is_partial=True,
        )

    @staticmethod
    def _unsatisfiable(total_length: int, failure: RangeFailure) -> ByteRangePlan:
        return ByteRangePlan(total_length=total_length, status=416, failure=failure)


class SegmentPlanner:
    """Partitions a media duration into contiguous, equal windows"""

    def plan(self, total_duration: Optional[float], part_count: int, allow_zero: bool = True) -> Tuple[SegmentWindow, ...]:
        """
        Split ``total_duration`` seconds into ``part_count`` windows.

        The last window always ends at exactly ``total_duration`` so float
        drift never drops the tail of the media. A zero duration yields
        zero-length windows unless ``allow_zero`` is False; callers that hand
        windows to a transcoder pass False.

        Raises:
            InvalidDuration: If the duration is missing, negative, not finite,
                or zero while ``allow_zero`` is False
            InvalidPartCount: If part_count is not an integer >= 1
        """
        if total_duration is None or isinstance(total_duration, bool) or not isinstance(total_duration, Real):
            raise InvalidDuration(f"Media duration is unknown: {total_duration!r}")
        try:
            seconds = float(total_duration)
        except OverflowError:
            raise InvalidDuration("Media duration is too large to represent in seconds")
        if not math.isfinite(seconds) or seconds < 0:
            raise InvalidDuration(f"Media duration must be a non-negative finite number, got {total_duration!r}")
        if seconds == 0 and not allow_zero:
            raise InvalidDuration("Media duration is zero")

        if isinstance(part_count, bool) or not isinstance(part_count, int) or part_count < 1:
            raise InvalidPartCount(f"Part count must be an integer >= 1, got {part_count!r}")

        window_length = seconds / part_count
        boundaries = [index * window_length for index in range(part_count)]
        boundaries.append(seconds)

        return tuple(
            SegmentWindow(index=index, start_time=boundaries[index], end_time=boundaries[index + 1])
            for index in range(part_count)
        )
