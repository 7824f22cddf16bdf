"""
Onboarding of veterinarians, clinics and pet resorts.

These records are created after the account exists, through their own
endpoints, and start unverified until an administrator reviews them
(see :mod:`api.services.verification`).
"""
from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from api.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from api.models import Account, Clinic, PetResort, Veterinarian
from api.services.verification import clinic_to_dict, pet_resort_to_dict, veterinarian_summary

logger = logging.getLogger(__name__)

PROFILE_UNDER_REVIEW = 'Your profile is under review'
REVIEW_NOTICE = 'Please give us 7 business days from the date of submission to review your profile'


def _account_or_404(user_id) -> Account:
    account = Account.objects.filter(id=user_id, deleted_at__isnull=True).first()
    if account is None:
        raise NotFoundError('User not found')
    return account


def _number(value):
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError('experience must be a valid number')
    return int(number) if number.is_integer() else number


# ---------------------------------------------------------------------
# Veterinarians
# ---------------------------------------------------------------------
def register_veterinarian(user_id, fields: dict) -> Veterinarian:
    """Store the submitted attributes as unverified ``{value, verified}`` wrappers."""
    account = _account_or_404(user_id)
    if account.role != Account.ROLE_VETERINARIAN:
        raise AuthorizationError('Only veterinarian accounts can apply for verification')
    if Veterinarian.objects.filter(user=account).exists():
        raise ConflictError('You have already applied for verification')
    registration = fields.get('registration')
    if registration and Veterinarian.objects.filter(registration_number=registration).exists():
        raise ConflictError('A veterinarian with this registration number already exists.')

    details = {}
    for key in Veterinarian.WRAPPED_FIELDS:
        if key not in fields:
            continue
        value = _number(fields[key]) if key == 'experience' else fields[key]
        details[key] = {'value': value, 'verified': False}

    try:
        with transaction.atomic():
            vet = Veterinarian.objects.create(
                user=account,
                details=details,
                registration_number=registration or None,
                is_verified=False,
                is_active=True,
            )
    except IntegrityError:
        raise ConflictError('A veterinarian with this registration number already exists.')
    logger.info('veterinarian profile %s submitted by account %s', vet.id, account.id)
    return vet


def check_veterinarian_verification(user_id) -> Veterinarian:
    vet = Veterinarian.objects.filter(user_id=user_id).first()
    if vet is None:
        raise NotFoundError('Veterinarian profile not found. Please register first.')
    if not vet.is_verified:
        raise AuthorizationError('Your veterinarian account is not yet verified. Please wait for verification.')
    return vet


def profile_screen(user_id) -> dict:
    vet = Veterinarian.objects.filter(user_id=user_id).first()
    if vet is None:
        raise NotFoundError('No veterinarian found with that user ID')
    clinics = Clinic.objects.filter(owner_id=user_id).order_by('created_at')
    title = vet.value_of('title')
    name = vet.value_of('name') or ''
    experience = vet.value_of('experience')
    return {
        'status': PROFILE_UNDER_REVIEW if not vet.is_verified else 'Your profile is verified',
        'message': REVIEW_NOTICE,
        'profile': {
            'name': f'{title} {name}'.strip() if title else name,
            'specialization': vet.value_of('specialization'),
            'qualification': vet.value_of('qualification'),
            'experience': f'{experience} years of experience' if experience is not None else None,
            'registration': vet.value_of('registration'),
            'profilePhotoUrl': vet.value_of('profilePhotoUrl'),
            'isVerified': vet.is_verified,
        },
        'clinics': [
            {
                'clinicId': c.id,
                'clinicName': c.clinic_name,
                'address': c.street_address or f'{c.locality}, {c.city}',
                'verified': c.verified,
            }
            for c in clinics
        ],
    }


# ---------------------------------------------------------------------
# Clinics
# ---------------------------------------------------------------------
def register_clinic(user_id, fields: dict) -> Clinic:
    account = _account_or_404(user_id)
    if Clinic.objects.filter(owner=account).exists():
        raise ConflictError('You have already registered a clinic')
    if Clinic.objects.filter(clinic_name=fields['clinic_name'], city=fields['city']).exists():
        raise ConflictError('A clinic with this name already exists in this city')
    try:
        with transaction.atomic():
            clinic = Clinic.objects.create(owner=account, verified=False, is_active=False, **fields)
    except IntegrityError:
        raise ConflictError('A clinic with this name already exists in this city')
    logger.info('clinic %s registered by account %s', clinic.id, account.id)
    return clinic


def all_clinics_with_vets() -> list[dict]:
    clinics = list(Clinic.objects.filter(verified=True).order_by('clinic_name'))
    vets = {v.user_id: v for v in Veterinarian.objects.filter(user_id__in={c.owner_id for c in clinics})}
    out = []
    for clinic in clinics:
        details = clinic_to_dict(clinic)
        details.pop('_id')
        out.append({
            'clinicDetails': details,
            'veterinarianDetails': veterinarian_summary(vets.get(clinic.owner_id), extended=True),
        })
    return out


# ---------------------------------------------------------------------
# Pet resorts
# ---------------------------------------------------------------------
def register_pet_resort(user_id, fields: dict) -> PetResort:
    account = _account_or_404(user_id)
    if PetResort.objects.filter(owner=account).exists():
        raise ConflictError('You already have a pet resort registered')
    resort = PetResort.objects.create(owner=account, is_verified=False, **fields)
    logger.info('pet resort %s registered by account %s', resort.id, account.id)
    return resort


def pet_resort_summary(resort: PetResort) -> dict:
    data = pet_resort_to_dict(resort)
    return {key: data[key] for key in ('_id', 'resortName', 'brandName', 'logo', 'services', 'isVerified')}
