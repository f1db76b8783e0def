import datetime

from conftest import attended
from services.eligibility_service import (
    eligible_for_nomination, eligible_for_voting, nomination_period,
    period_label, rank_eligible, voting_period,
)

REF_2024 = datetime.date(2024, 11, 1)


def _add(registry, first, attendance):
    m = registry.add({"first_name": first, "last_name": "Rider"})
    if attendance:
        registry.update(m.id, {"attendance": attendance})
    return m


def test_periods():
    assert nomination_period(2024) == [(2024, m) for m in range(3, 9)]
    assert voting_period(2024) == [(2024, m) for m in range(4, 10)]
    assert period_label(nomination_period(2024)) == "Apr 2024 - Sep 2024"
    assert period_label(voting_period(2024)) == "May 2024 - Oct 2024"


def test_empty_registry_yields_empty_lists(registry):
    assert eligible_for_nomination(registry, REF_2024) == []
    assert eligible_for_voting(registry, REF_2024) == []


def test_exactly_three_months_is_eligible(registry):
    _add(registry, "Three", attended(2024, 3, 6, 8))
    _add(registry, "Two", attended(2024, 3, 6))

    result = eligible_for_nomination(registry, REF_2024)
    assert [(e.member.first_name, e.count) for e in result] == [("Three", 3)]


def test_ranked_by_count_descending(registry):
    _add(registry, "C", attended(2024, 3, 4, 5))
    _add(registry, "A", attended(2024, 3, 4, 5, 6, 7))
    _add(registry, "B", attended(2024, 3, 4, 5, 6))

    result = eligible_for_nomination(registry, REF_2024)
    assert [(e.member.first_name, e.count) for e in result] == [("A", 5), ("B", 4), ("C", 3)]


def test_ties_keep_insertion_order(registry):
    _add(registry, "B", attended(2024, 3, 4, 5, 6))
    _add(registry, "A", attended(2024, 5, 6, 7, 8))

    result = eligible_for_nomination(registry, REF_2024)
    assert [e.member.first_name for e in result] == ["B", "A"]


def test_months_outside_period_and_other_years_do_not_count(registry):
    attendance = {2023: {3: True, 4: True, 5: True}, 2024: {0: True, 1: True, 2: True, 9: True, 10: True}}
    _add(registry, "Off", attendance)

    assert eligible_for_nomination(registry, REF_2024) == []
    assert eligible_for_nomination(registry, datetime.date(2023, 6, 1))[0].count == 3


def test_explicit_false_does_not_count(registry):
    _add(registry, "Mixed", {2024: {3: True, 4: False, 5: True, 6: False, 7: True}})
    assert eligible_for_nomination(registry, REF_2024)[0].count == 3


def test_jane_doe_scenario(registry):
    registry.add({"first_name": "Jane", "last_name": "Doe"})
    jane = registry.list()[0]
    registry.update(jane.id, {"attendance": {2024: {3: True, 4: True, 5: True}}})

    nomination = eligible_for_nomination(registry, datetime.date(2024, 6, 30))
    assert [(e.member.full_name, e.count) for e in nomination] == [("Jane Doe", 3)]

    # May-Oct only sees May and Jun
    assert eligible_for_voting(registry, datetime.date(2024, 6, 30)) == []
    assert rank_eligible(registry.list(), voting_period(2024), threshold=2)[0].count == 2


def test_evaluation_does_not_change_registry(registry):
    m = _add(registry, "Jane", attended(2024, 4, 5, 6))
    before = registry.list()
    eligible_for_nomination(registry, REF_2024)
    eligible_for_voting(registry, REF_2024)
    assert registry.list() == before
    assert registry.get(m.id).attendance == {2024: {4: True, 5: True, 6: True}}


def test_voting_uses_may_to_october(registry):
    _add(registry, "Late", attended(2024, 7, 8, 9))

    assert [e.member.first_name for e in eligible_for_voting(registry, REF_2024)] == ["Late"]
    assert eligible_for_nomination(registry, REF_2024) == []
