"""
Database models for the Vetician backend.

These models capture the accounts of the marketplace (pet parents,
veterinarians, paravets, pet resorts and administrators), the role
specific profiles hanging off an account, pets, and the two booking
flows.  Field groups that an administrator verifies one by one are
stored as JSON documents of ``{value, verified}`` wrappers so that the
shape exposed to the front-end is kept as is.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class Account(AbstractUser):
    """Login identity with exactly one marketplace role.

    The same email may register once per role, so ``(email, role)`` is
    the natural key; ``username`` only exists to satisfy Django's auth
    machinery and is a random hex string.
    """
    ROLE_PET_PARENT = 'pet_parent'
    ROLE_VETERINARIAN = 'veterinarian'
    ROLE_PARAVET = 'paravet'
    ROLE_PET_RESORT = 'pet_resort'
    ROLE_VERIFIED_PARAVET = 'verified_paravet'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_PET_PARENT, 'Pet parent'),
        (ROLE_VETERINARIAN, 'Veterinarian'),
        (ROLE_PARAVET, 'Paravet'),
        (ROLE_PET_RESORT, 'Pet resort'),
        (ROLE_VERIFIED_PARAVET, 'Verified paravet'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    # Roles a visitor may pick when signing up or logging in
    PUBLIC_ROLES = (ROLE_VETERINARIAN, ROLE_PET_PARENT, ROLE_PARAVET, ROLE_PET_RESORT)

    name = models.CharField(max_length=100)
    email = models.EmailField(db_index=True)
    phone = models.CharField(max_length=20, blank=True, db_index=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_PET_PARENT, db_index=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=['email', 'role'], condition=models.Q(deleted_at__isnull=True),
                name='uniq_account_email_role',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"

    @staticmethod
    def generate_username() -> str:
        return uuid.uuid4().hex


class ParentProfile(models.Model):
    """Contact details of a pet parent."""
    GENDER_CHOICES = [
        ('male', 'Male'),
        ('female', 'Female'),
        ('other', 'Other'),
    ]
    user = models.OneToOneField(
        Account, null=True, blank=True, on_delete=models.CASCADE, related_name='parent_profile'
    )
    name = models.CharField(max_length=100)
    email = models.EmailField(db_index=True)
    phone = models.CharField(max_length=20, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, default='other')
    image = models.CharField(max_length=512, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class Pet(models.Model):
    owner = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='pets')
    name = models.CharField(max_length=100)
    species = models.CharField(max_length=50)
    breed = models.CharField(max_length=100, blank=True)
    gender = models.CharField(max_length=20)
    dob = models.DateField(null=True, blank=True)
    height = models.FloatField(null=True, blank=True)
    weight = models.FloatField(null=True, blank=True)
    color = models.CharField(max_length=50, blank=True)
    image = models.CharField(max_length=512, blank=True)
    pet_photo = models.CharField(max_length=512, blank=True)
    blood_group = models.CharField(max_length=20, blank=True)
    distinctive_features = models.TextField(blank=True)
    allergies = models.TextField(blank=True)
    current_medications = models.TextField(blank=True)
    chronic_diseases = models.TextField(blank=True)
    injuries = models.TextField(blank=True)
    surgeries = models.TextField(blank=True)
    vaccinations = models.JSONField(default=list, blank=True)
    medical_history = models.TextField(blank=True)
    vaccination_status = models.CharField(max_length=50, blank=True)
    special_needs = models.TextField(blank=True)
    location = models.CharField(max_length=255, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.species})"


class Veterinarian(models.Model):
    """Veterinarian onboarding record.

    Every submitted attribute lives in ``details`` as a
    ``{value, verified}`` wrapper keyed by its front-end name.  The
    registration number is also kept in its own column so it can be
    unique across veterinarians.
    """
    WRAPPED_FIELDS = (
        'title', 'name', 'gender', 'city', 'experience', 'specialization',
        'qualification', 'registration', 'identityProof', 'profilePhotoUrl',
    )
    # All of these must be verified before is_verified is set
    VERIFICATION_FIELDS = (
        'name', 'gender', 'city', 'experience', 'specialization',
        'qualification', 'registration', 'identityProof',
    )

    user = models.OneToOneField(Account, on_delete=models.CASCADE, related_name='veterinarian_profile')
    details = models.JSONField(default=dict, blank=True)
    registration_number = models.CharField(max_length=64, unique=True, null=True, blank=True)
    is_verified = models.BooleanField(default=False, db_index=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"vet {self.value_of('name')} (u={self.user_id})"

    def value_of(self, field: str):
        wrapper = self.details.get(field)
        return wrapper.get('value') if isinstance(wrapper, dict) else None


class Clinic(models.Model):
    owner = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='clinics')
    clinic_name = models.CharField(max_length=255)
    establishment_type = models.CharField(max_length=100, blank=True)
    city = models.CharField(max_length=100, db_index=True)
    locality = models.CharField(max_length=255, blank=True)
    street_address = models.CharField(max_length=255)
    fees = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    timings = models.JSONField(default=dict, blank=True)
    verified = models.BooleanField(default=False, db_index=True)
    is_active = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['clinic_name', 'city'], name='uniq_clinic_name_city'),
        ]

    def __str__(self) -> str:
        return f"{self.clinic_name}, {self.city}"


class PetResort(models.Model):
    owner = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='pet_resorts')
    resort_name = models.CharField(max_length=255)
    brand_name = models.CharField(max_length=255)
    logo = models.CharField(max_length=512)
    address = models.TextField()
    city = models.CharField(max_length=100, blank=True, db_index=True)
    resort_phone = models.CharField(max_length=20)
    owner_phone = models.CharField(max_length=20)
    services = models.JSONField(default=list, blank=True)
    opening_hours = models.JSONField(default=dict, blank=True)
    notice = models.TextField(blank=True)
    is_verified = models.BooleanField(default=False, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.resort_name


class Paravet(models.Model):
    """Paravet onboarding application.

    Each JSON group holds the answers of one onboarding step, every
    answer wrapped with its own ``verified`` flag.  ``current_step`` is
    only a progress marker; ``completion_percentage`` is derived (see
    :func:`api.services.paravet.calculate_completion`).
    """
    STATUS_PENDING = 'pending'
    STATUS_UNDER_REVIEW = 'under_review'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'pending'),
        (STATUS_UNDER_REVIEW, 'under_review'),
        (STATUS_APPROVED, 'approved'),
        (STATUS_REJECTED, 'rejected'),
    )

    user = models.OneToOneField(Account, on_delete=models.CASCADE, related_name='paravet_profile')

    personal_info = models.JSONField(default=dict, blank=True)
    documents = models.JSONField(default=dict, blank=True)
    experience = models.JSONField(default=dict, blank=True)
    payment_info = models.JSONField(default=dict, blank=True)
    compliance = models.JSONField(default=dict, blank=True)
    training = models.JSONField(default=dict, blank=True)

    current_step = models.PositiveSmallIntegerField(default=1)
    completion_percentage = models.PositiveSmallIntegerField(default=0)
    submitted = models.BooleanField(default=False)
    submitted_at = models.DateTimeField(null=True, blank=True)
    approval_status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)
    approved_by_admin = models.CharField(max_length=64, blank=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    last_updated = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"paravet u={self.user_id} step={self.current_step} {self.approval_status}"


class Appointment(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_CONFIRMED = 'confirmed'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'pending'),
        (STATUS_CONFIRMED, 'confirmed'),
        (STATUS_COMPLETED, 'completed'),
        (STATUS_CANCELLED, 'cancelled'),
    )

    owner = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='appointments')
    clinic = models.ForeignKey(Clinic, on_delete=models.CASCADE, related_name='appointments')
    veterinarian = models.ForeignKey(
        Veterinarian, null=True, blank=True, on_delete=models.SET_NULL, related_name='appointments'
    )
    pet_name = models.CharField(max_length=100)
    pet_type = models.CharField(max_length=50, blank=True)
    breed = models.CharField(max_length=100, blank=True)
    illness = models.TextField(blank=True)
    date = models.DateTimeField()
    booking_type = models.CharField(max_length=50, blank=True)
    contact_info = models.JSONField(default=dict, blank=True)
    pet_pic = models.CharField(max_length=512, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['owner', 'created_at'], name='api_appt_owner_created_idx')]

    def __str__(self) -> str:
        return f"appt {self.pet_name} @ {self.clinic_id} ({self.status})"


class DoorstepBooking(models.Model):
    SERVICE_TYPE_CHOICES = [
        ('Vet Home Visit', 'Vet Home Visit'),
        ('Vaccination at Home', 'Vaccination at Home'),
        ('Pet Grooming', 'Pet Grooming'),
        ('Pet Training Session', 'Pet Training Session'),
        ('Physiotherapy', 'Physiotherapy'),
        ('Pet Walking', 'Pet Walking'),
    ]
    PAYMENT_METHOD_CHOICES = [('online', 'online'), ('cash', 'cash'), ('card', 'card')]

    STATUS_PENDING = 'pending'
    STATUS_CONFIRMED = 'confirmed'
    STATUS_IN_PROGRESS = 'in-progress'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'pending'),
        (STATUS_CONFIRMED, 'confirmed'),
        (STATUS_IN_PROGRESS, 'in-progress'),
        (STATUS_COMPLETED, 'completed'),
        (STATUS_CANCELLED, 'cancelled'),
    ]
    PAYMENT_STATUS_CHOICES = [('pending', 'pending'), ('paid', 'paid'), ('failed', 'failed')]

    owner = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='doorstep_bookings')
    service_type = models.CharField(max_length=32, choices=SERVICE_TYPE_CHOICES)
    pets = models.ManyToManyField(Pet, blank=True, related_name='doorstep_bookings')
    service_partner_id = models.CharField(max_length=64)
    service_partner_name = models.CharField(max_length=255, blank=True)
    appointment_date = models.DateTimeField()
    time_slot = models.CharField(max_length=64)
    address = models.JSONField(default=dict, blank=True)
    is_emergency = models.BooleanField(default=False)
    repeat_booking = models.BooleanField(default=False)
    special_instructions = models.TextField(blank=True)
    payment_method = models.CharField(max_length=10, choices=PAYMENT_METHOD_CHOICES, default='online')
    coupon_code = models.CharField(max_length=50, blank=True)
    base_price = models.DecimalField(max_digits=10, decimal_places=2)
    emergency_charge = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    discount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default='pending')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['owner', 'created_at'], name='api_doorstep_owner_created_idx')]

    def __str__(self) -> str:
        return f"{self.service_type} for u={self.owner_id} ({self.status})"


class AuditEvent(models.Model):
    user = models.ForeignKey(Account, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='api_audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='api_audit_object_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
