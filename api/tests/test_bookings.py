import pytest

from api.models import Account, Appointment, Clinic, DoorstepBooking, Pet, Veterinarian

pytestmark = pytest.mark.django_db


@pytest.fixture
def clinic(make_account):
    owner = make_account(Account.ROLE_VETERINARIAN)
    vet = Veterinarian.objects.create(user=owner, details={'name': {'value': 'Dr. Rao', 'verified': True}})
    c = Clinic.objects.create(owner=owner, clinic_name='Paws', city='Pune', street_address='1 MG Road', verified=True)
    c.vet = vet
    return c


def appointment_payload(clinic, **overrides):
    body = {
        'clinicId': clinic.id,
        'veterinarianId': clinic.vet.id,
        'petName': 'Bruno',
        'petType': 'dog',
        'illness': 'Limping',
        'date': '2030-05-01T10:00:00Z',
        'bookingType': 'in-clinic',
        'contactInfo': {'phone': '9876543210'},
    }
    body.update(overrides)
    return body


def booking_payload(pet_ids, **overrides):
    body = {
        'serviceType': 'Pet Grooming',
        'petIds': pet_ids,
        'servicePartnerId': 'partner-7',
        'servicePartnerName': 'Groom Squad',
        'appointmentDate': '2030-05-02T09:00:00Z',
        'timeSlot': '09:00-10:00',
        'address': {'line1': '7 Park Street', 'city': 'Pune'},
        'basePrice': '800.00',
        'totalAmount': '800.00',
    }
    body.update(overrides)
    return body


# ---------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------
def test_book_and_list_appointments(auth_client, parent, clinic):
    client = auth_client(parent)
    r = client.post('/api/auth/petparent/appointments/book', appointment_payload(clinic), format='json')
    assert r.status_code == 201
    assert r.data['data']['appointmentDetails']['status'] == 'pending'
    assert r.data['data']['clinicDetails']['clinicName'] == 'Paws'
    assert r.data['data']['veterinarianDetails']['name'] == 'Dr. Rao'

    r = client.get('/api/auth/petparent/appointments')
    assert r.data['count'] == 1


def test_book_appointment_unknown_clinic_or_vet(auth_client, parent, clinic):
    client = auth_client(parent)
    r = client.post('/api/auth/petparent/appointments/book', appointment_payload(clinic, clinicId=999999),
                    format='json')
    assert r.status_code == 404
    assert r.data['message'] == 'No clinic found with that ID'
    r = client.post('/api/auth/petparent/appointments/book', appointment_payload(clinic, veterinarianId=999999),
                    format='json')
    assert r.status_code == 404
    assert not Appointment.objects.exists()


def test_book_appointment_requires_auth(api_client, clinic):
    r = api_client.post('/api/auth/petparent/appointments/book', appointment_payload(clinic), format='json')
    assert r.status_code == 401


def test_appointment_status_and_cancel(auth_client, parent, clinic, make_account):
    client = auth_client(parent)
    appt_id = client.post('/api/auth/petparent/appointments/book', appointment_payload(clinic),
                          format='json').data['data']['appointmentDetails']['_id']

    bad = client.patch(f'/api/auth/petparent/appointments/{appt_id}/status', {'status': 'teleported'},
                       format='json')
    assert bad.status_code == 400

    r = client.patch(f'/api/auth/petparent/appointments/{appt_id}/status', {'status': 'confirmed'}, format='json')
    assert r.data['data']['appointmentDetails']['status'] == 'confirmed'

    stranger = auth_client(make_account(Account.ROLE_PET_PARENT))
    assert stranger.patch(f'/api/auth/petparent/appointments/{appt_id}/cancel').status_code == 403
    assert Appointment.objects.get(id=appt_id).status == 'confirmed'

    assert client.patch(f'/api/auth/petparent/appointments/{appt_id}/cancel').status_code == 200
    assert Appointment.objects.get(id=appt_id).status == 'cancelled'


# ---------------------------------------------------------------------
# Doorstep bookings
# ---------------------------------------------------------------------
def test_create_and_list_doorstep_booking(auth_client, parent):
    pet = Pet.objects.create(owner=parent, name='Bruno', species='dog', gender='male')
    client = auth_client(parent)
    r = client.post('/api/doorstep/bookings', booking_payload([pet.id], isEmergency=True, emergencyCharge='200.00',
                                                              totalAmount='1000.00'), format='json')
    assert r.status_code == 201
    data = r.data['data']
    assert data['status'] == 'pending'
    assert data['paymentStatus'] == 'pending'
    assert data['paymentMethod'] == 'online'
    assert data['petIds'] == [{'_id': pet.id, 'name': 'Bruno', 'species': 'dog', 'breed': ''}]
    assert str(data['totalAmount']) == '1000.00'

    listing = client.get('/api/doorstep/bookings')
    assert listing.data['count'] == 1


def test_doorstep_booking_validation(auth_client, parent, make_account):
    client = auth_client(parent)
    assert client.post('/api/doorstep/bookings', booking_payload([], serviceType='Teleportation'),
                       format='json').status_code == 400
    assert client.post('/api/doorstep/bookings', booking_payload([], basePrice='-1'),
                       format='json').status_code == 400

    foreign = Pet.objects.create(owner=make_account(Account.ROLE_PET_PARENT), name='Kitty', species='cat',
                                 gender='female')
    r = client.post('/api/doorstep/bookings', booking_payload([foreign.id]), format='json')
    assert r.status_code == 404
    assert not DoorstepBooking.objects.exists()


def test_doorstep_detail_visible_to_owner_and_admin(auth_client, admin_client, parent, make_account):
    client = auth_client(parent)
    booking_id = client.post('/api/doorstep/bookings', booking_payload([]), format='json').data['data']['_id']

    r = client.get(f'/api/doorstep/bookings/{booking_id}')
    assert r.status_code == 200
    assert r.data['data']['user']['email'] == parent.email
    assert admin_client.get(f'/api/doorstep/bookings/{booking_id}').status_code == 200
    stranger = auth_client(make_account(Account.ROLE_PET_PARENT))
    assert stranger.get(f'/api/doorstep/bookings/{booking_id}').status_code == 403
    assert client.get('/api/doorstep/bookings/999999').status_code == 404


def test_doorstep_status_update(auth_client, admin_client, parent):
    client = auth_client(parent)
    booking_id = client.post('/api/doorstep/bookings', booking_payload([]), format='json').data['data']['_id']
    r = admin_client.patch(f'/api/doorstep/bookings/{booking_id}/status', {'status': 'in-progress'}, format='json')
    assert r.status_code == 200
    assert DoorstepBooking.objects.get(id=booking_id).status == 'in-progress'
    r = client.patch(f'/api/doorstep/bookings/{booking_id}/status', {'status': 'done-ish'}, format='json')
    assert r.status_code == 400


def test_cancel_booking_by_non_owner_leaves_status(auth_client, admin_client, parent, make_account):
    client = auth_client(parent)
    booking_id = client.post('/api/doorstep/bookings', booking_payload([]), format='json').data['data']['_id']

    stranger = auth_client(make_account(Account.ROLE_PET_PARENT))
    r = stranger.patch(f'/api/doorstep/bookings/{booking_id}/cancel')
    assert r.status_code == 403
    assert r.data['message'] == 'Not authorized to cancel this booking'
    assert DoorstepBooking.objects.get(id=booking_id).status == 'pending'
    # admins may change status but only the owner cancels
    assert admin_client.patch(f'/api/doorstep/bookings/{booking_id}/cancel').status_code == 403

    r = client.patch(f'/api/doorstep/bookings/{booking_id}/cancel')
    assert r.status_code == 200
    assert DoorstepBooking.objects.get(id=booking_id).status == 'cancelled'
