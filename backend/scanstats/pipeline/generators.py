"""
Stage generators shared by catalog entries and request handlers.
"""

from datetime import datetime, timedelta, tzinfo
from typing import Optional

from scanstats.pipeline.stages import Pipeline, field_ref, group, match, project, unwind
from scanstats.utils.time import beginning_of_day, end_of_day, get_timezone


def count_aggregation(field: str, result_name: str, group_path: str) -> Pipeline:
    """
    Count occurrences of each distinct value under ``group_path``.

    Args:
        field: Top-level field to keep (unwound if it holds an array)
        result_name: Key the distinct value is reported under
        group_path: Field path (possibly nested) to group by

    Returns:
        Pipeline producing rows shaped ``{result_name: value, count: n}``
    """
    return (
        project({field: 1}),
        unwind(field),
        group({"_id": field_ref(group_path), "count": {"$sum": 1}}),
        project({result_name: "$_id", "count": 1, "_id": 0}),
    )


def time_filter_stages(
    init_days: int,
    end_days: int,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> Pipeline:
    """
    Match analyses whose ``finishedAt`` lies in
    [start of day(now + init_days), end of day(now + end_days)].

    Must be called per request: the window moves with the wall clock.
    The offsets are not checked; init_days > end_days matches nothing.
    """
    tz = tz or get_timezone()
    now = now.astimezone(tz) if now else datetime.now(tz)

    return (
        match(
            {
                "finishedAt": {
                    "$gte": beginning_of_day(now + timedelta(days=init_days)),
                    "$lte": end_of_day(now + timedelta(days=end_days)),
                }
            }
        ),
    )
