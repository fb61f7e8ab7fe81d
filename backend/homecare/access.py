"""
Capability checks over records that are already loaded.

Nothing here touches the database. Client and nurse ids come from separate
tables and may collide numerically, so every check matches on role as well
as id.
"""

from typing import Iterable, Mapping

from homecare.auth import Identity
from homecare.exceptions import Forbidden
from homecare.models.service_request import ServiceRequest


def is_client_of(request: ServiceRequest, identity: Identity) -> bool:
    return identity.is_client and request.client_id == identity.id


def is_nurse_of(request: ServiceRequest, identity: Identity) -> bool:
    return identity.is_nurse and request.nurse_id == identity.id


def is_participant(request: ServiceRequest, identity: Identity) -> bool:
    """True if the identity is the request's client or its assigned nurse."""
    return is_client_of(request, identity) or is_nurse_of(request, identity)


def owns_patients(identity: Identity, patient_ids: Iterable[int], patient_lookup: Mapping[int, int]) -> bool:
    """
    True iff every id resolves, through ``patient_lookup`` (patient id ->
    owner id), to a patient owned by ``identity``. Unknown ids fail the check.
    """
    if not identity.is_client:
        return False
    ids = list(patient_ids)
    if not ids:
        return False
    return all(patient_lookup.get(pid) == identity.id for pid in ids)


def ensure_participant(request: ServiceRequest, identity: Identity) -> ServiceRequest:
    if not is_participant(request, identity):
        raise Forbidden("Access denied")
    return request
