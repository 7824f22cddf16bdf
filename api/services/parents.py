import re
from typing import Optional

from api.exceptions import ConflictError, NotFoundError
from api.models import Account, ParentProfile

NOT_PROVIDED = 'Not provided'


def clean_phone(phone: Optional[str]) -> Optional[str]:
    if not phone or phone == NOT_PROVIDED:
        return None
    return re.sub(r'\D', '', phone) or None


def clean_address(address: Optional[str]) -> Optional[str]:
    if not address or address == NOT_PROVIDED:
        return None
    return address.strip()


def parent_to_dict(parent: ParentProfile) -> dict:
    return {
        'id': parent.id,
        'userId': parent.user_id,
        'name': parent.name,
        'email': parent.email,
        'phone': parent.phone,
        'address': parent.address,
        'gender': parent.gender,
        'image': parent.image,
        'createdAt': parent.created_at,
        'updatedAt': parent.updated_at,
    }


def register_parent(*, name, email, phone=None, address=None, gender=None, image=None, user_id=None):
    """Upsert by owning account; returns ``(parent, created)``.

    A profile not yet linked to any account is claimed by email.  An email
    already used by another account's profile is a conflict.
    """
    account = None
    if user_id:
        account = Account.objects.filter(id=user_id).first()
        if account is None:
            raise NotFoundError('User not found')

    email = email.lower().strip()
    taken = ParentProfile.objects.filter(email=email, user__isnull=False)
    if account is not None:
        taken = taken.exclude(user=account)
    if taken.exists():
        raise ConflictError('Parent with this email already exists')

    parent = None
    if account is not None:
        parent = ParentProfile.objects.filter(user=account).first()
    if parent is None:
        parent = ParentProfile.objects.filter(email=email, user__isnull=True).order_by('id').first()
    created = parent is None
    if created:
        parent = ParentProfile(gender='other')

    parent.name = name
    parent.email = email
    parent.phone = clean_phone(phone)
    parent.address = clean_address(address)
    if gender:
        parent.gender = gender.lower()
    if image is not None or created:
        parent.image = image
    if account is not None:
        parent.user = account
    parent.save()
    return parent, created


def get_parent(user_id) -> ParentProfile:
    parent = ParentProfile.objects.filter(user_id=user_id).first()
    if parent is None:
        raise NotFoundError('Parent not found')
    return parent


def update_parent(user_id, data: dict):
    """Partial update of the account's parent profile, creating it when missing.

    Returns ``(parent, created)``.
    """
    parent = ParentProfile.objects.filter(user_id=user_id).first()
    if parent is None:
        account = Account.objects.filter(id=user_id).first()
        if account is None:
            raise NotFoundError('User not found')
        parent = ParentProfile(
            user=account,
            name=(data.get('name') or account.name).strip(),
            email=(data.get('email') or account.email).lower().strip(),
            phone=clean_phone(data.get('phone')),
            address=clean_address(data.get('address')),
            gender=(data.get('gender') or 'other').lower(),
            image=data.get('image'),
        )
        parent.save()
        return parent, True

    if data.get('name'):
        parent.name = data['name'].strip()
    if data.get('email'):
        parent.email = data['email'].lower().strip()
    if data.get('phone'):
        parent.phone = clean_phone(data['phone'])
    if data.get('address'):
        parent.address = clean_address(data['address'])
    if data.get('gender'):
        parent.gender = data['gender'].lower()
    if 'image' in data:
        parent.image = data['image']
    parent.save()
    return parent, False


def find_parent(parent_id) -> ParentProfile:
    parent = ParentProfile.objects.filter(id=parent_id).first()
    if parent is None:
        raise NotFoundError('Parent not found')
    return parent
