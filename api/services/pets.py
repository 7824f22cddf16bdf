from api.exceptions import NotFoundError
from api.models import Account, Pet


def owner_or_404(user_id) -> Account:
    account = Account.objects.filter(id=user_id, deleted_at__isnull=True).first()
    if account is None:
        raise NotFoundError('User not found')
    return account


def create_pet(owner: Account, fields: dict) -> Pet:
    return Pet.objects.create(owner=owner, **fields)


def list_pets(user_id):
    return Pet.objects.filter(owner_id=user_id).order_by('-created_at')


def get_owned_pet(user_id, pet_id) -> Pet:
    pet = Pet.objects.filter(id=pet_id, owner_id=user_id).first()
    if pet is None:
        raise NotFoundError('Pet not found for this user')
    return pet


def update_pet(pet: Pet, fields: dict) -> Pet:
    for attr, value in fields.items():
        setattr(pet, attr, value)
    pet.save()
    return pet
