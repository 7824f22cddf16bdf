"""
Administrator verification of professional profiles.

Every profile type declares the flags that must all be set before the
profile as a whole counts as verified, as a :class:`VerificationAggregate`.
Veterinarians recompute ``is_verified`` from it after each field
verification.  Paravets only expose the aggregate as ``fullyVerified``;
approving a paravet stays an explicit administrator decision.  Clinics
and pet resorts declare their single top-level flag, which admins toggle
directly.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from django.db import transaction

from api.exceptions import NotFoundError, ValidationError
from api.models import Account, Clinic, PetResort, Veterinarian
from api.services.audit import log_action

logger = logging.getLogger(__name__)


def resolve_path(document: Any, path: str) -> Any:
    """Walk a dotted ``path`` through nested dicts; ``None`` when a segment is missing."""
    node = document
    for segment in path.split('.'):
        if not isinstance(node, Mapping) or segment not in node:
            return None
        node = node[segment]
    return node


def _flag(node: Any) -> bool:
    # a wrapper carries its own ``verified``; a bare boolean is the flag itself
    if isinstance(node, Mapping):
        return node.get('verified') is True
    return node is True


@dataclass(frozen=True)
class VerificationAggregate:
    """Overall-verified predicate over a declared list of required flags."""
    required: tuple[str, ...]

    def pending(self, document: Mapping[str, Any]) -> list[str]:
        return [path for path in self.required if not _flag(resolve_path(document, path))]

    def is_verified(self, document: Mapping[str, Any]) -> bool:
        return not self.pending(document)


VETERINARIAN_AGGREGATE = VerificationAggregate(Veterinarian.VERIFICATION_FIELDS)
PARAVET_AGGREGATE = VerificationAggregate((
    'personalInfo.fullName',
    'personalInfo.mobileNumber',
    'documents.governmentId',
    'documents.certificationProof',
    'experience.yearsOfExperience',
    'paymentInfo.accountHolderName',
    'compliance.agreedToCodeOfConduct',
))
CLINIC_AGGREGATE = VerificationAggregate(('verified',))
PET_RESORT_AGGREGATE = VerificationAggregate(('isVerified',))


# ---------------------------------------------------------------------
# Projections
# ---------------------------------------------------------------------
def veterinarian_summary(vet: Veterinarian | None, *, extended: bool = False) -> dict | None:
    if vet is None:
        return None
    data = {
        'vetId': vet.id,
        'title': vet.value_of('title'),
        'name': vet.value_of('name'),
        'specialization': vet.value_of('specialization'),
        'profilePhotoUrl': vet.value_of('profilePhotoUrl'),
        'isVerified': vet.is_verified,
    }
    if extended:
        data.update({
            'gender': vet.value_of('gender'),
            'city': vet.value_of('city'),
            'experience': vet.value_of('experience'),
        })
    return data


def veterinarian_to_dict(vet: Veterinarian) -> dict:
    data = {'_id': vet.id, 'userId': vet.user_id}
    data.update(vet.details)
    data.update({
        'isVerified': vet.is_verified,
        'isActive': vet.is_active,
        'pendingVerification': VETERINARIAN_AGGREGATE.pending(vet.details),
        'createdAt': vet.created_at,
        'updatedAt': vet.updated_at,
    })
    return data


def clinic_to_dict(clinic: Clinic) -> dict:
    return {
        '_id': clinic.id,
        'clinicId': clinic.id,
        'userId': clinic.owner_id,
        'clinicName': clinic.clinic_name,
        'establishmentType': clinic.establishment_type,
        'city': clinic.city,
        'locality': clinic.locality,
        'streetAddress': clinic.street_address,
        'fees': clinic.fees,
        'timings': clinic.timings,
        'verified': clinic.verified,
        'isActive': clinic.is_active,
        'createdAt': clinic.created_at,
    }


def account_summary(account: Account | None) -> dict | None:
    if account is None:
        return None
    return {'id': account.id, 'name': account.name, 'email': account.email, 'phone': account.phone}


def pet_resort_to_dict(resort: PetResort) -> dict:
    return {
        '_id': resort.id,
        'userId': resort.owner_id,
        'resortName': resort.resort_name,
        'brandName': resort.brand_name,
        'logo': resort.logo,
        'address': resort.address,
        'city': resort.city,
        'resortPhone': resort.resort_phone,
        'ownerPhone': resort.owner_phone,
        'services': resort.services,
        'openingHours': resort.opening_hours,
        'notice': resort.notice,
        'isVerified': resort.is_verified,
        'createdAt': resort.created_at,
    }


def _vets_by_owner(owner_ids: Iterable[int]) -> dict[int, Veterinarian]:
    return {v.user_id: v for v in Veterinarian.objects.filter(user_id__in=set(owner_ids))}


# ---------------------------------------------------------------------
# Veterinarians
# ---------------------------------------------------------------------
def list_veterinarians(*, verified: bool, city: str | None = None, specialization: str | None = None) -> list[dict]:
    qs = Veterinarian.objects.filter(is_verified=verified).order_by('-created_at')
    vets = list(qs)
    # wrapped values live in JSON; filter in Python to stay portable across backends
    if city:
        vets = [v for v in vets if v.value_of('city') == city]
    if specialization:
        vets = [v for v in vets if v.value_of('specialization') == specialization]
    return [veterinarian_to_dict(v) for v in vets]


def verify_veterinarian_field(vet_id, field_name: str, *, admin: Account | None = None) -> Veterinarian:
    """Mark one wrapped field verified and recompute ``is_verified``.

    Raises :class:`ValidationError` without touching the record when the
    field is missing, not a wrapper, or already verified.
    """
    with transaction.atomic():
        vet = Veterinarian.objects.select_for_update().filter(id=vet_id).first()
        if vet is None:
            raise NotFoundError('Veterinarian not found')
        wrapper = vet.details.get(field_name)
        if not isinstance(wrapper, dict):
            raise ValidationError('Invalid field specified')
        if wrapper.get('verified'):
            raise ValidationError('Field is already verified')

        details = dict(vet.details)
        details[field_name] = {**wrapper, 'verified': True}
        vet.details = details
        vet.is_verified = VETERINARIAN_AGGREGATE.is_verified(details)
        vet.save(update_fields=['details', 'is_verified', 'updated_at'])

    logger.info('veterinarian %s field %s verified (aggregate=%s)', vet.id, field_name, vet.is_verified)
    log_action(user=admin, action='verify_veterinarian_field', object_type='veterinarian',
               object_id=vet.id, detail={'field': field_name, 'isVerified': vet.is_verified})
    return vet


# ---------------------------------------------------------------------
# Clinics
# ---------------------------------------------------------------------
def list_clinics(*, verified: bool, city: str | None = None, establishment_type: str | None = None,
                 locality: str | None = None) -> list[dict]:
    qs = Clinic.objects.filter(verified=verified).order_by('-created_at')
    if city:
        qs = qs.filter(city=city)
    if establishment_type:
        qs = qs.filter(establishment_type=establishment_type)
    if locality:
        qs = qs.filter(locality=locality)
    clinics = list(qs)
    vets = _vets_by_owner(c.owner_id for c in clinics)
    out = []
    for clinic in clinics:
        item = clinic_to_dict(clinic)
        item['veterinarian'] = veterinarian_summary(vets.get(clinic.owner_id), extended=verified)
        out.append(item)
    return out


def verify_clinic(clinic_id, *, admin: Account | None = None) -> Clinic:
    clinic = Clinic.objects.filter(id=clinic_id).first()
    if clinic is None:
        raise NotFoundError('Clinic not found')
    if CLINIC_AGGREGATE.is_verified({'verified': clinic.verified}):
        raise ValidationError('Clinic is already verified')
    clinic.verified = True
    clinic.save(update_fields=['verified'])
    logger.info('clinic %s verified', clinic.id)
    log_action(user=admin, action='verify_clinic', object_type='clinic', object_id=clinic.id)
    return clinic


# ---------------------------------------------------------------------
# Pet resorts
# ---------------------------------------------------------------------
def list_pet_resorts(*, verified: bool, city: str | None = None, services: list[str] | None = None) -> list[dict]:
    qs = PetResort.objects.filter(is_verified=verified).select_related('owner').order_by('-created_at')
    if city:
        qs = qs.filter(city=city)
    resorts = list(qs)
    if services:
        wanted = set(services)
        resorts = [r for r in resorts if wanted.intersection(r.services or [])]
    out = []
    for resort in resorts:
        item = pet_resort_to_dict(resort)
        item['user'] = account_summary(resort.owner)
        out.append(item)
    return out


def set_pet_resort_verified(resort_id, verified: bool, *, admin: Account | None = None) -> PetResort:
    resort = PetResort.objects.filter(id=resort_id).first()
    if resort is None:
        raise NotFoundError('Pet resort not found')
    if PET_RESORT_AGGREGATE.is_verified({'isVerified': resort.is_verified}) == verified:
        state = 'verified' if verified else 'unverified'
        raise ValidationError(f'Pet resort is already {state}')
    resort.is_verified = verified
    resort.save(update_fields=['is_verified'])
    action = 'verify_pet_resort' if verified else 'unverify_pet_resort'
    logger.info('pet resort %s %s', resort.id, action)
    log_action(user=admin, action=action, object_type='pet_resort', object_id=resort.id)
    return resort
