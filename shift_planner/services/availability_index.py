"""Matching of recurring availability rules against shift windows."""
from datetime import datetime, timedelta, tzinfo
from typing import Iterable, List

from shift_planner.models.availability import AvailabilityBlock
from shift_planner.time_math import MINUTES_PER_DAY, day_of_week, minutes_of_day, to_local


class AvailabilityIndex:
    """Enforced availability rules of one employee, queried per shift window.

    Informational blocks passed in are ignored. Rules are keyed by weekday
    (0 = Sunday) in the business timezone.
    """

    def __init__(self, blocks: Iterable[AvailabilityBlock], tz: tzinfo):
        self.tz = tz
        self._by_day = {}
        for block in blocks:
            if not block.type.is_enforced:
                continue
            self._by_day.setdefault(block.day_of_week, []).append(block)

    def conflicts(self, start: datetime, end: datetime) -> List[AvailabilityBlock]:
        """
        Return the blocks that collide with the shift ``[start, end)``.

        A shift crossing local midnight is checked against blocks on its
        start weekday from its start minute to the end of the day, and
        against blocks on its end weekday from midnight to its end minute.
        A shift ending exactly at midnight stays on its start weekday.

        Args:
            start: Shift start instant
            end: Shift end instant (already normalized to be after start)

        Returns:
            Conflicting blocks; empty when the shift is clear
        """
        local_start = to_local(start, self.tz)
        local_end = to_local(end, self.tz)

        start_day = day_of_week(local_start)
        end_day = day_of_week(local_end)
        start_minute = minutes_of_day(local_start)
        end_minute = minutes_of_day(local_end)
        if end_minute == 0 and local_end > local_start:
            # Ending at midnight occupies nothing of the next day
            end_day = day_of_week(local_end - timedelta(minutes=1))
            end_minute = MINUTES_PER_DAY
        crosses_midnight = start_day != end_day

        candidates = list(self._by_day.get(start_day, []))
        if crosses_midnight:
            candidates += self._by_day.get(end_day, [])

        conflicting = []
        for block in candidates:
            if block.is_full_day:
                conflicting.append(block)
                continue

            block_start = minutes_of_day(block.start_time)
            block_end = minutes_of_day(block.end_time)

            if not crosses_midnight:
                window = (start_minute, end_minute)
            elif block.day_of_week == start_day:
                window = (start_minute, MINUTES_PER_DAY)
            elif block.day_of_week == end_day:
                window = (0, end_minute)
            else:
                continue

            if window[0] < block_end and window[1] > block_start:
                conflicting.append(block)

        return conflicting
