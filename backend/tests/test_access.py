"""Capability predicates over loaded records."""

from __future__ import annotations

import pytest

from homecare.access import ensure_participant, is_participant, owns_patients
from homecare.auth import Identity
from homecare.exceptions import Forbidden
from homecare.models.service_request import ServiceRequest


@pytest.fixture()
def request_record() -> ServiceRequest:
    return ServiceRequest(id=10, client_id=1, nurse_id=2, patient_ids=[5], rate=50.0, state="pending")


def test_client_and_assigned_nurse_participate(request_record: ServiceRequest) -> None:
    assert is_participant(request_record, Identity(id=1, role="client"))
    assert is_participant(request_record, Identity(id=2, role="nurse"))


def test_other_identities_do_not_participate(request_record: ServiceRequest) -> None:
    assert not is_participant(request_record, Identity(id=3, role="client"))
    assert not is_participant(request_record, Identity(id=3, role="nurse"))


def test_matching_id_with_the_other_role_does_not_participate(request_record: ServiceRequest) -> None:
    # Client 2 is not nurse 2.
    assert not is_participant(request_record, Identity(id=2, role="client"))
    assert not is_participant(request_record, Identity(id=1, role="nurse"))


def test_ensure_participant_raises_forbidden(request_record: ServiceRequest) -> None:
    assert ensure_participant(request_record, Identity(id=1, role="client")) is request_record
    with pytest.raises(Forbidden):
        ensure_participant(request_record, Identity(id=9, role="client"))


@pytest.mark.parametrize(
    "patient_ids, expected",
    [
        ([5], True),
        ([5, 6], True),
        ([5, 7], False),     # 7 belongs to someone else
        ([5, 99], False),    # 99 does not exist
        ([], False),
    ],
)
def test_owns_patients(patient_ids: list[int], expected: bool) -> None:
    lookup = {5: 1, 6: 1, 7: 4}
    assert owns_patients(Identity(id=1, role="client"), patient_ids, lookup) is expected


def test_nurse_never_owns_patients() -> None:
    assert not owns_patients(Identity(id=1, role="nurse"), [5], {5: 1})
