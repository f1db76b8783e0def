"""
Nomination and voting eligibility.

Chapter rule: a member must attend at least three meetings within a fixed
six-month window of the reference year.

- Nomination period: April through September (month indexes 3-8).
- Voting period: May through October (month indexes 4-9).

Both windows are anchored to the calendar year of the reference date; a
window that would cross into the next year is not supported.
"""
import datetime
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from core.attendance import count_attended
from core.utils import month_name
from models.member import Member
from services.member_service import MemberRegistry

NOMINATION_MONTHS = range(3, 9)
VOTING_MONTHS = range(4, 10)
ELIGIBILITY_THRESHOLD = 3


@dataclass
class EligibleMember:
    """A member together with the number of meetings attended in the period."""
    member: Member
    count: int


def nomination_period(year: int) -> List[Tuple[int, int]]:
    return [(year, m) for m in NOMINATION_MONTHS]


def voting_period(year: int) -> List[Tuple[int, int]]:
    return [(year, m) for m in VOTING_MONTHS]


def period_label(period: Sequence[Tuple[int, int]]) -> str:
    """E.g. 'Apr 2024 - Sep 2024'."""
    (y0, m0), (y1, m1) = period[0], period[-1]
    return f"{month_name(m0)} {y0} - {month_name(m1)} {y1}"


def rank_eligible(members: Iterable[Member], period: Sequence[Tuple[int, int]],
                  threshold: int = ELIGIBILITY_THRESHOLD) -> List[EligibleMember]:
    """
    Counts attended meetings in `period` for each member, keeps those at or
    above `threshold`, and orders them by count (highest first).
    Ties keep roster order since `sorted` is stable.
    """
    counted = [EligibleMember(m, count_attended(m.attendance, period)) for m in members]
    kept = [e for e in counted if e.count >= threshold]
    return sorted(kept, key=lambda e: e.count, reverse=True)


def eligible_for_nomination(registry: MemberRegistry, reference_date: datetime.date) -> List[EligibleMember]:
    return rank_eligible(registry.list(), nomination_period(reference_date.year))


def eligible_for_voting(registry: MemberRegistry, reference_date: datetime.date) -> List[EligibleMember]:
    return rank_eligible(registry.list(), voting_period(reference_date.year))
