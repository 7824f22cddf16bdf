import pytest

from api.models import Account, ParentProfile, Pet

pytestmark = pytest.mark.django_db


def pet_payload(user_id, **overrides):
    body = {'userId': user_id, 'name': 'Bruno', 'species': 'dog', 'gender': 'male', 'breed': 'Labrador'}
    body.update(overrides)
    return body


# ---------------------------------------------------------------------
# Parents
# ---------------------------------------------------------------------
def test_parent_register_upserts(auth_client, parent):
    client = auth_client(parent)
    body = {'name': 'Anna', 'email': 'Anna@Example.com', 'phone': '+91 98765-43210', 'address': 'Not provided',
            'gender': 'Female', 'userId': parent.id}
    r = client.post('/api/auth/parent-register', body, format='json')
    assert r.status_code == 201
    assert r.data['parent']['email'] == 'anna@example.com'
    assert r.data['parent']['phone'] == '919876543210'
    assert r.data['parent']['address'] is None
    assert r.data['parent']['gender'] == 'female'

    r = client.post('/api/auth/parent-register', {**body, 'name': 'Anna K'}, format='json')
    assert r.status_code == 200
    assert ParentProfile.objects.filter(user=parent).count() == 1
    assert ParentProfile.objects.get(user=parent).name == 'Anna K'


def test_parent_get_update_delete(auth_client, parent):
    client = auth_client(parent)
    assert client.get(f'/api/auth/parents/{parent.id}').status_code == 404

    r = client.patch(f'/api/auth/parents/{parent.id}', {'address': '7 Park Street'}, format='json')
    assert r.status_code == 200
    assert r.data['message'] == 'Parent profile created successfully'
    assert r.data['parent']['name'] == parent.name

    r = client.patch(f'/api/auth/parents/{parent.id}', {'name': 'New Name'}, format='json')
    assert r.data['message'] == 'Parent profile updated successfully'
    assert r.data['parent']['address'] == '7 Park Street'

    fetched = client.get(f'/api/auth/parents/{parent.id}')
    assert fetched.data['parent']['name'] == 'New Name'

    profile_id = fetched.data['parent']['id']
    assert client.delete(f'/api/auth/parents/{profile_id}').status_code == 200
    assert not ParentProfile.objects.filter(id=profile_id).exists()


def test_parent_profile_of_other_account_forbidden(auth_client, parent, make_account):
    stranger = auth_client(make_account(Account.ROLE_PET_PARENT))
    assert stranger.get(f'/api/auth/parents/{parent.id}').status_code == 403
    assert stranger.patch(f'/api/auth/parents/{parent.id}', {'name': 'x'}, format='json').status_code == 403


# ---------------------------------------------------------------------
# Pets
# ---------------------------------------------------------------------
def test_create_and_list_pets(auth_client, parent):
    client = auth_client(parent)
    r = client.post('/api/auth/pet-register', pet_payload(parent.id, dob='2021-04-01', weight='12.5'), format='json')
    assert r.status_code == 201
    assert r.data['pet']['userId'] == parent.id
    assert r.data['pet']['weight'] == 12.5
    assert r.data['pet']['dob'] == '2021-04-01'

    r = client.get(f'/api/auth/pets/user/{parent.id}')
    assert r.data['count'] == 1
    assert r.data['pets'][0]['name'] == 'Bruno'


def test_create_pet_validation(auth_client, parent):
    client = auth_client(parent)
    body = pet_payload(parent.id)
    del body['species']
    assert client.post('/api/auth/pet-register', body, format='json').status_code == 400

    r = client.post('/api/auth/pet-register', pet_payload(parent.id, dob='01/04/2021'), format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'dob: Invalid date format. Please use YYYY-MM-DD'

    r = client.post('/api/auth/pet-register', pet_payload(parent.id, height='tall'), format='json')
    assert r.data['message'] == 'height: height must be a valid number'


def test_create_pet_for_other_user_forbidden(auth_client, parent, make_account):
    other = make_account(Account.ROLE_PET_PARENT)
    r = auth_client(parent).post('/api/auth/pet-register', pet_payload(other.id), format='json')
    assert r.status_code == 403
    assert not Pet.objects.exists()


def test_update_pet_only_touches_known_fields(auth_client, parent):
    pet = Pet.objects.create(owner=parent, name='Bruno', species='dog', gender='male')
    r = auth_client(parent).patch(f'/api/auth/users/{parent.id}/pets/{pet.id}',
                                  {'color': 'brown', 'bloodGroup': 'DEA 1.1', 'owner': 999, 'id': 5},
                                  format='json')
    assert r.status_code == 200
    pet.refresh_from_db()
    assert pet.color == 'brown'
    assert pet.blood_group == 'DEA 1.1'
    assert pet.owner_id == parent.id
    assert r.data['pet']['id'] == pet.id


def test_pet_not_owned_by_user_is_404(auth_client, parent, make_account):
    other = make_account(Account.ROLE_PET_PARENT)
    pet = Pet.objects.create(owner=other, name='Kitty', species='cat', gender='female')
    client = auth_client(parent)
    r = client.patch(f'/api/auth/users/{parent.id}/pets/{pet.id}', {'color': 'black'}, format='json')
    assert r.status_code == 404
    assert r.data['message'] == 'Pet not found for this user'
    assert client.delete(f'/api/auth/users/{parent.id}/pets/{pet.id}').status_code == 404
    assert Pet.objects.filter(id=pet.id).exists()


def test_delete_pet(auth_client, parent):
    pet = Pet.objects.create(owner=parent, name='Bruno', species='dog', gender='male')
    r = auth_client(parent).delete(f'/api/auth/users/{parent.id}/pets/{pet.id}')
    assert r.status_code == 200
    assert not Pet.objects.filter(id=pet.id).exists()


def test_admin_can_manage_any_users_pets(admin_client, parent):
    pet = Pet.objects.create(owner=parent, name='Bruno', species='dog', gender='male')
    assert admin_client.get(f'/api/auth/pets/user/{parent.id}').data['count'] == 1
    assert admin_client.delete(f'/api/auth/users/{parent.id}/pets/{pet.id}').status_code == 200


def test_parent_register_cannot_claim_another_accounts_profile(auth_client, parent, make_account):
    auth_client(parent).post('/api/auth/parent-register', {'name': 'Anna', 'email': 'anna@example.com'},
                             format='json')
    other = make_account(Account.ROLE_PET_PARENT)
    r = auth_client(other).post('/api/auth/parent-register', {'name': 'Mallory', 'email': 'anna@example.com'},
                                format='json')
    assert r.status_code == 409
    profile = ParentProfile.objects.get(email='anna@example.com')
    assert profile.user_id == parent.id
    assert profile.name == 'Anna'


def test_parent_register_updates_own_profile_when_email_changes(auth_client, parent):
    client = auth_client(parent)
    client.post('/api/auth/parent-register', {'name': 'Anna', 'email': 'anna@example.com'}, format='json')
    r = client.post('/api/auth/parent-register', {'name': 'Anna', 'email': 'anna.k@example.com'}, format='json')
    assert r.status_code == 200
    assert ParentProfile.objects.filter(user=parent).count() == 1
    assert ParentProfile.objects.get(user=parent).email == 'anna.k@example.com'


def test_parent_register_claims_unlinked_profile_by_email(auth_client, parent):
    orphan = ParentProfile.objects.create(name='Anna', email='anna@example.com')
    r = auth_client(parent).post('/api/auth/parent-register', {'name': 'Anna', 'email': 'anna@example.com'},
                                 format='json')
    assert r.status_code == 200
    orphan.refresh_from_db()
    assert orphan.user_id == parent.id
