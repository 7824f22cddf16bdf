"""
Clinic appointments and doorstep service bookings.

Prices on doorstep bookings are taken as submitted; nothing is
recomputed server side.
"""
from __future__ import annotations

import logging

from django.db import transaction

from api.exceptions import AuthorizationError, NotFoundError
from api.models import Account, Appointment, Clinic, DoorstepBooking, Pet, Veterinarian
from api.permissions import is_owner_or_admin
from api.services.verification import veterinarian_summary

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Appointments
# ---------------------------------------------------------------------
def appointment_to_dict(appt: Appointment) -> dict:
    clinic = appt.clinic
    vet = appt.veterinarian
    return {
        'appointmentDetails': {
            '_id': appt.id,
            'userId': appt.owner_id,
            'petName': appt.pet_name,
            'petType': appt.pet_type,
            'breed': appt.breed,
            'illness': appt.illness,
            'date': appt.date,
            'bookingType': appt.booking_type,
            'contactInfo': appt.contact_info,
            'petPic': appt.pet_pic,
            'status': appt.status,
            'createdAt': appt.created_at,
        },
        'clinicDetails': {
            'clinicId': clinic.id,
            'clinicName': clinic.clinic_name,
            'establishmentType': clinic.establishment_type,
            'city': clinic.city,
            'locality': clinic.locality,
            'streetAddress': clinic.street_address,
            'fees': clinic.fees,
            'timings': clinic.timings,
        },
        'veterinarianDetails': veterinarian_summary(vet),
    }


def create_appointment(owner: Account, *, clinic_id, veterinarian_id=None, **fields) -> Appointment:
    clinic = Clinic.objects.filter(id=clinic_id).first()
    if clinic is None:
        raise NotFoundError('No clinic found with that ID')
    vet = None
    if veterinarian_id:
        vet = Veterinarian.objects.filter(id=veterinarian_id).first()
        if vet is None:
            raise NotFoundError('No veterinarian found with that ID')
    appt = Appointment.objects.create(
        owner=owner, clinic=clinic, veterinarian=vet, status=Appointment.STATUS_PENDING, **fields
    )
    logger.info('appointment %s booked by account %s at clinic %s', appt.id, owner.id, clinic.id)
    return appt


def list_appointments(owner: Account):
    return (Appointment.objects.filter(owner=owner)
            .select_related('clinic', 'veterinarian').order_by('-created_at'))


def _appointment_or_404(appt_id) -> Appointment:
    appt = Appointment.objects.select_related('clinic', 'veterinarian').filter(id=appt_id).first()
    if appt is None:
        raise NotFoundError('Appointment not found')
    return appt


def update_appointment_status(caller: Account, appt_id, status: str) -> Appointment:
    appt = _appointment_or_404(appt_id)
    if not is_owner_or_admin(caller, appt.owner_id):
        raise AuthorizationError('Not authorized to update this appointment')
    appt.status = status
    appt.save(update_fields=['status', 'updated_at'])
    return appt


def cancel_appointment(caller: Account, appt_id) -> Appointment:
    appt = _appointment_or_404(appt_id)
    if appt.owner_id != caller.id:
        raise AuthorizationError('Not authorized to cancel this appointment')
    appt.status = Appointment.STATUS_CANCELLED
    appt.save(update_fields=['status', 'updated_at'])
    logger.info('appointment %s cancelled', appt.id)
    return appt


# ---------------------------------------------------------------------
# Doorstep bookings
# ---------------------------------------------------------------------
def pet_brief(pet: Pet) -> dict:
    return {'_id': pet.id, 'name': pet.name, 'species': pet.species, 'breed': pet.breed}


def booking_to_dict(booking: DoorstepBooking, *, with_owner: bool = False) -> dict:
    data = {
        '_id': booking.id,
        'userId': booking.owner_id,
        'serviceType': booking.service_type,
        'petIds': [pet_brief(p) for p in booking.pets.all()],
        'servicePartnerId': booking.service_partner_id,
        'servicePartnerName': booking.service_partner_name,
        'appointmentDate': booking.appointment_date,
        'timeSlot': booking.time_slot,
        'address': booking.address,
        'isEmergency': booking.is_emergency,
        'repeatBooking': booking.repeat_booking,
        'specialInstructions': booking.special_instructions,
        'paymentMethod': booking.payment_method,
        'couponCode': booking.coupon_code,
        'basePrice': booking.base_price,
        'emergencyCharge': booking.emergency_charge,
        'discount': booking.discount,
        'totalAmount': booking.total_amount,
        'status': booking.status,
        'paymentStatus': booking.payment_status,
        'createdAt': booking.created_at,
        'updatedAt': booking.updated_at,
    }
    if with_owner:
        owner = booking.owner
        data['user'] = {'id': owner.id, 'name': owner.name, 'email': owner.email, 'phone': owner.phone}
    return data


def create_booking(owner: Account, *, pet_ids=(), **fields) -> DoorstepBooking:
    pet_ids = list(dict.fromkeys(pet_ids))
    pets = list(Pet.objects.filter(owner=owner, id__in=pet_ids))
    if len(pets) != len(pet_ids):
        raise NotFoundError('One or more pets were not found for this user')
    with transaction.atomic():
        booking = DoorstepBooking.objects.create(owner=owner, **fields)
        booking.pets.set(pets)
    logger.info('doorstep booking %s (%s) created by account %s', booking.id, booking.service_type, owner.id)
    return booking


def list_bookings(owner: Account):
    return (DoorstepBooking.objects.filter(owner=owner)
            .prefetch_related('pets').order_by('-created_at'))


def _booking_or_404(booking_id) -> DoorstepBooking:
    booking = DoorstepBooking.objects.select_related('owner').filter(id=booking_id).first()
    if booking is None:
        raise NotFoundError('Booking not found')
    return booking


def get_booking(caller: Account, booking_id) -> DoorstepBooking:
    booking = _booking_or_404(booking_id)
    if not is_owner_or_admin(caller, booking.owner_id):
        raise AuthorizationError('Not authorized to view this booking')
    return booking


def update_booking_status(caller: Account, booking_id, status: str) -> DoorstepBooking:
    booking = _booking_or_404(booking_id)
    if not is_owner_or_admin(caller, booking.owner_id):
        raise AuthorizationError('Not authorized to update this booking')
    booking.status = status
    booking.save(update_fields=['status', 'updated_at'])
    return booking


def cancel_booking(caller: Account, booking_id) -> DoorstepBooking:
    booking = _booking_or_404(booking_id)
    if booking.owner_id != caller.id:
        raise AuthorizationError('Not authorized to cancel this booking')
    booking.status = DoorstepBooking.STATUS_CANCELLED
    booking.save(update_fields=['status', 'updated_at'])
    logger.info('doorstep booking %s cancelled', booking.id)
    return booking
