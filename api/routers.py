"""
URL mappings for the Vetician API.

Paths mirror the ones the mobile app and the admin panel call, so
trailing slashes are omitted throughout.
"""
from django.urls import path, include

from .auth_views import (
    register_view,
    login_view,
    refresh_token_view,
    logout_view,
    logout_all_view,
    delete_account_view,
    send_otp_view,
    verify_otp_view,
)
from .views import appointments, doorstep, health, paravet, parents, pets, professionals


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),

    # Authentication
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh-token', refresh_token_view, name='refresh_token_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    path('api/auth/logout-all', logout_all_view, name='logout_all_view'),
    path('api/auth/delete-account', delete_account_view, name='delete_account_view'),
    path('api/auth/send-otp', send_otp_view, name='send_otp_view'),
    path('api/auth/verify-otp', verify_otp_view, name='verify_otp_view'),

    # Parents
    path('api/auth/parent-register', parents.parent_register),
    path('api/auth/parents/<int:pk>', parents.parent_detail),

    # Pets
    path('api/auth/pet-register', pets.pet_register),
    path('api/auth/pets/user/<int:user_id>', pets.pets_by_user),
    path('api/auth/users/<int:user_id>/pets/<int:pet_id>', pets.user_pet_detail),

    # Appointments
    path('api/auth/petparent/appointments/book', appointments.book_appointment),
    path('api/auth/petparent/appointments', appointments.my_appointments),
    path('api/auth/petparent/appointments/<int:pk>/status', appointments.appointment_status),
    path('api/auth/petparent/appointments/<int:pk>/cancel', appointments.cancel_appointment),

    # Veterinarians
    path('api/auth/veterinarian-register', professionals.veterinarian_register),
    path('api/auth/check-veterinarian-verification', professionals.check_veterinarian_verification),
    path('api/auth/veterinarian/profile-screen', professionals.veterinarian_profile_screen),
    path('api/auth/admin/verified', professionals.verified_veterinarians),
    path('api/auth/admin/unverified', professionals.unverified_veterinarians),
    path('api/auth/verify/<int:vet_id>/<str:field_name>', professionals.verify_veterinarian_field),

    # Clinics
    path('api/auth/register-clinic', professionals.register_clinic),
    path('api/auth/admin/unverified/clinic', professionals.unverified_clinics),
    path('api/auth/admin/verified/clinic', professionals.verified_clinics),
    path('api/auth/admin/clinic/verify/<int:clinic_id>', professionals.verify_clinic),
    path('api/auth/petparent/verified/all-clinic', professionals.all_clinics_with_vets),

    # Pet resorts
    path('api/auth/petresort/register', professionals.register_pet_resort),
    path('api/auth/admin/verified/petresort', professionals.verified_pet_resorts),
    path('api/auth/admin/unverified/petresort', professionals.unverified_pet_resorts),
    path('api/auth/admin/petresort/verify/<int:resort_id>', professionals.verify_pet_resort),
    path('api/auth/admin/petresort/unverify/<int:resort_id>', professionals.unverify_pet_resort),

    # Paravet onboarding
    path('api/paravet/initialize', paravet.initialize),
    path('api/paravet/profile/<int:user_id>', paravet.profile),
    path('api/paravet/personal-info/<int:user_id>', paravet.personal_info),
    path('api/paravet/experience-skills/<int:user_id>', paravet.experience_skills),
    path('api/paravet/payment-info/<int:user_id>', paravet.payment_info),
    path('api/paravet/code-of-conduct/<int:user_id>', paravet.code_of_conduct),
    path('api/paravet/training/<int:user_id>', paravet.training),
    path('api/paravet/upload-documents/<int:user_id>', paravet.upload_documents),
    path('api/paravet/send-mobile-otp/<int:user_id>', paravet.send_mobile_otp),
    path('api/paravet/verify-mobile/<int:user_id>', paravet.verify_mobile),
    path('api/paravet/submit/<int:user_id>', paravet.submit),
    path('api/paravet/admin/unverified', paravet.admin_unverified),
    path('api/paravet/admin/verify/<int:pk>', paravet.admin_verify),
    path('api/paravet/admin/verify-field/<int:pk>/<str:field>', paravet.admin_verify_field),

    # Doorstep services
    path('api/doorstep/bookings', doorstep.bookings_collection),
    path('api/doorstep/bookings/<int:pk>', doorstep.booking_detail),
    path('api/doorstep/bookings/<int:pk>/status', doorstep.booking_status),
    path('api/doorstep/bookings/<int:pk>/cancel', doorstep.cancel_booking),
]
