from datetime import date, datetime, timezone

import pytest

from wellness_compliance.core.enums import ExemptionStatus
from wellness_compliance.core.exceptions import InvalidTransitionError
from wellness_compliance.exemptions.index import ExemptionIndex

from fakes import MANILA, make_exemption


def test_end_date_is_inclusive():
    index = ExemptionIndex.build([make_exemption("ana", date(2026, 3, 2), date(2026, 3, 4))], MANILA)

    assert not index.is_exempted("ana", date(2026, 3, 1))
    assert index.is_exempted("ana", date(2026, 3, 2))
    assert index.is_exempted("ana", date(2026, 3, 4))
    assert not index.is_exempted("ana", date(2026, 3, 5))


def test_open_ended_exemption_covers_the_future():
    index = ExemptionIndex.build([make_exemption("ana", date(2026, 3, 2), None)], MANILA)

    assert index.is_exempted("ana", date(2030, 1, 1))


def test_end_before_start_covers_nothing():
    index = ExemptionIndex.build([make_exemption("ana", date(2026, 3, 5), date(2026, 3, 2))], MANILA)

    assert not any(index.is_exempted("ana", date(2026, 3, d)) for d in range(1, 10))


@pytest.mark.parametrize("status", [ExemptionStatus.PENDING, ExemptionStatus.REJECTED])
def test_only_effective_exemptions_are_indexed(status):
    index = ExemptionIndex.build([make_exemption("ana", date(2026, 3, 2), None, status=status)], MANILA)

    assert not index.is_exempted("ana", date(2026, 3, 3))


def test_ended_early_still_covers_truncated_range():
    index = ExemptionIndex.build(
        [make_exemption("ana", date(2026, 3, 2), date(2026, 3, 4), status=ExemptionStatus.ENDED_EARLY)], MANILA
    )

    assert index.is_exempted("ana", date(2026, 3, 4))
    assert not index.is_exempted("ana", date(2026, 3, 5))


def test_any_overlapping_exemption_exempts():
    index = ExemptionIndex.build(
        [
            make_exemption("ana", date(2026, 3, 2), date(2026, 3, 3), exemption_id="first"),
            make_exemption("ana", date(2026, 3, 3), date(2026, 3, 6), exemption_id="second"),
        ],
        MANILA,
    )

    assert index.exemption_for("ana", date(2026, 3, 2)).exemption_id == "first"
    assert index.exemption_for("ana", date(2026, 3, 6)).exemption_id == "second"
    assert index.exemption_for("ben", date(2026, 3, 3)) is None


def test_timestamp_bounds_are_normalized_to_local_dates():
    # 2026-03-01 20:00 UTC is already 2026-03-02 in Manila.
    exemption = make_exemption("ana", datetime(2026, 3, 1, 20, 0, tzinfo=timezone.utc), date(2026, 3, 2))

    index = ExemptionIndex.build([exemption], MANILA)

    assert not index.is_exempted("ana", date(2026, 3, 1))
    assert index.is_exempted("ana", date(2026, 3, 2))


def test_state_machine_allows_only_legal_transitions():
    pending = make_exemption("ana", date(2026, 3, 2), None, status=ExemptionStatus.PENDING)

    approved = pending.transition(ExemptionStatus.APPROVED)
    assert approved.status == ExemptionStatus.APPROVED
    assert approved.transition(ExemptionStatus.ENDED_EARLY).status == ExemptionStatus.ENDED_EARLY
    assert pending.transition(ExemptionStatus.REJECTED).status == ExemptionStatus.REJECTED

    with pytest.raises(InvalidTransitionError):
        approved.transition(ExemptionStatus.REJECTED)
    with pytest.raises(InvalidTransitionError):
        pending.transition(ExemptionStatus.ENDED_EARLY)
    with pytest.raises(InvalidTransitionError):
        pending.transition(ExemptionStatus.REJECTED).transition(ExemptionStatus.APPROVED)
