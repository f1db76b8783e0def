import pytest

from models.member import Member
from services.analytics_service import has_attendance_data, monthly_attendance_stats


def _member(i, attendance):
    return Member(id=str(i), first_name="M", last_name=str(i),
                  join_date="2024-01-01T00:00:00", attendance=attendance)


def test_no_members_means_zero_percent():
    stats = monthly_attendance_stats([], 2024)
    assert len(stats) == 12
    assert all(s.count == 0 and s.percent == 0 for s in stats)
    assert not has_attendance_data(stats)


def test_monthly_counts_and_percent():
    members = [
        _member(1, {2024: {0: True, 5: True}}),
        _member(2, {2024: {0: True}, 2023: {5: True}}),
        _member(3, {}),
        _member(4, {2024: {0: False}}),
    ]
    stats = monthly_attendance_stats(members, 2024)

    assert stats[0].month == "Jan"
    assert stats[0].count == 2
    assert stats[0].percent == pytest.approx(50.0)
    assert stats[5].count == 1
    assert stats[5].percent == pytest.approx(25.0)
    assert stats[11].count == 0
    assert has_attendance_data(stats)
