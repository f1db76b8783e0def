from dataclasses import dataclass
from typing import List, Sequence

from core.attendance import is_attended
from core.utils import MONTHS
from models.member import Member


@dataclass
class MonthStat:
    month: str
    count: int
    percent: float


def monthly_attendance_stats(members: Sequence[Member], year: int) -> List[MonthStat]:
    """
    Builds the attendance trend for the dashboard chart.

    Args:
        members: Current roster.
        year: The calendar year to chart.

    Returns:
        List[MonthStat]: Twelve entries (Jan..Dec) with the number of members
        who attended and the share of the roster as a percentage.
    """
    total = len(members)
    stats = []
    for index, name in enumerate(MONTHS):
        attended = sum(1 for m in members if is_attended(m.attendance, year, index))
        percent = (attended / total) * 100 if total > 0 else 0.0
        stats.append(MonthStat(month=name, count=attended, percent=percent))
    return stats


def has_attendance_data(stats: Sequence[MonthStat]) -> bool:
    return any(s.percent > 0 for s in stats)
