"""
Django admin registrations.

Operators use ``/admin/`` to inspect onboarding records and bookings;
verification itself goes through the API so it is audited.
"""

from django.contrib import admin

from .models import (
    Account,
    ParentProfile,
    Pet,
    Veterinarian,
    Clinic,
    PetResort,
    Paravet,
    Appointment,
    DoorstepBooking,
    AuditEvent,
)


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ('id', 'email', 'name', 'role', 'is_active', 'deleted_at')
    list_filter = ('role', 'is_active')
    search_fields = ('email', 'name', 'phone')
    exclude = ('password',)


@admin.register(ParentProfile)
class ParentProfileAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'email', 'phone', 'user')
    search_fields = ('name', 'email', 'phone')


@admin.register(Pet)
class PetAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'species', 'breed', 'owner')
    list_filter = ('species',)
    search_fields = ('name', 'breed')


@admin.register(Veterinarian)
class VeterinarianAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'registration_number', 'is_verified', 'is_active', 'created_at')
    list_filter = ('is_verified',)
    search_fields = ('registration_number', 'user__email')


@admin.register(Clinic)
class ClinicAdmin(admin.ModelAdmin):
    list_display = ('id', 'clinic_name', 'city', 'owner', 'verified', 'is_active')
    list_filter = ('verified', 'city')
    search_fields = ('clinic_name', 'city', 'locality')


@admin.register(PetResort)
class PetResortAdmin(admin.ModelAdmin):
    list_display = ('id', 'resort_name', 'brand_name', 'city', 'owner', 'is_verified')
    list_filter = ('is_verified', 'city')
    search_fields = ('resort_name', 'brand_name')


@admin.register(Paravet)
class ParavetAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'current_step', 'completion_percentage', 'approval_status', 'submitted_at')
    list_filter = ('approval_status', 'submitted')
    search_fields = ('user__email',)


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'owner', 'clinic', 'veterinarian', 'pet_name', 'date', 'status')
    list_filter = ('status',)


@admin.register(DoorstepBooking)
class DoorstepBookingAdmin(admin.ModelAdmin):
    list_display = ('id', 'owner', 'service_type', 'appointment_date', 'status', 'payment_status', 'total_amount')
    list_filter = ('service_type', 'status', 'payment_status')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('id', 'action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
