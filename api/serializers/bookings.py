from rest_framework import serializers

from api.models import Appointment, DoorstepBooking

from .auth import clean_text


class AppointmentCreateSerializer(serializers.Serializer):
    clinicId = serializers.IntegerField(min_value=1, source='clinic_id')
    veterinarianId = serializers.IntegerField(min_value=1, required=False, allow_null=True, source='veterinarian_id')
    petName = serializers.CharField(max_length=100, source='pet_name')
    petType = serializers.CharField(max_length=50, required=False, allow_blank=True, source='pet_type')
    breed = serializers.CharField(max_length=100, required=False, allow_blank=True)
    illness = serializers.CharField(required=False, allow_blank=True)
    date = serializers.DateTimeField()
    bookingType = serializers.CharField(max_length=50, required=False, allow_blank=True, source='booking_type')
    contactInfo = serializers.DictField(required=False, source='contact_info')
    petPic = serializers.CharField(max_length=512, required=False, allow_blank=True, source='pet_pic')

    def validate_illness(self, v):
        return clean_text(v)


class AppointmentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c[0] for c in Appointment.STATUS_CHOICES])


class DoorstepBookingCreateSerializer(serializers.Serializer):
    serviceType = serializers.ChoiceField(choices=DoorstepBooking.SERVICE_TYPE_CHOICES, source='service_type')
    petIds = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False, source='pet_ids')
    servicePartnerId = serializers.CharField(max_length=64, source='service_partner_id')
    servicePartnerName = serializers.CharField(max_length=255, required=False, allow_blank=True,
                                               source='service_partner_name')
    appointmentDate = serializers.DateTimeField(source='appointment_date')
    timeSlot = serializers.CharField(max_length=64, source='time_slot')
    address = serializers.DictField(required=False)
    isEmergency = serializers.BooleanField(required=False, default=False, source='is_emergency')
    repeatBooking = serializers.BooleanField(required=False, default=False, source='repeat_booking')
    specialInstructions = serializers.CharField(required=False, allow_blank=True, source='special_instructions')
    paymentMethod = serializers.ChoiceField(choices=DoorstepBooking.PAYMENT_METHOD_CHOICES, required=False,
                                            default='online', source='payment_method')
    couponCode = serializers.CharField(max_length=50, required=False, allow_blank=True, source='coupon_code')
    basePrice = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, source='base_price')
    emergencyCharge = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False,
                                               default=0, source='emergency_charge')
    discount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, default=0)
    totalAmount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, source='total_amount')

    def validate_specialInstructions(self, v):
        return clean_text(v)


class DoorstepStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=DoorstepBooking.STATUS_CHOICES)
