from urllib.parse import urlparse

from django.conf import settings
from rest_framework import serializers

from .auth import clean_text


class InitializeSerializer(serializers.Serializer):
    userId = serializers.IntegerField(min_value=1)


class EmergencyContactSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    number = serializers.CharField(max_length=20, required=False, allow_blank=True)


class PersonalInfoSerializer(serializers.Serializer):
    fullName = serializers.CharField(max_length=100, required=False, allow_blank=True)
    mobileNumber = serializers.RegexField(r'^\+?\d{10,13}$', required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    serviceArea = serializers.CharField(max_length=255, required=False, allow_blank=True)
    emergencyContact = EmergencyContactSerializer(required=False)

    def validate_fullName(self, v):
        return clean_text(v)


class AvailabilitySerializer(serializers.Serializer):
    days = serializers.ListField(child=serializers.CharField(max_length=16), required=False)
    startTime = serializers.CharField(max_length=16, required=False, allow_blank=True)
    endTime = serializers.CharField(max_length=16, required=False, allow_blank=True)


class ExperienceSkillsSerializer(serializers.Serializer):
    yearsOfExperience = serializers.IntegerField(min_value=0, max_value=80, required=False, allow_null=True)
    areasOfExpertise = serializers.ListField(child=serializers.CharField(max_length=64), required=False)
    languagesSpoken = serializers.ListField(child=serializers.CharField(max_length=32), required=False)
    availability = AvailabilitySerializer(required=False)


class PaymentMethodSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=['upi', 'bank'])
    value = serializers.CharField(max_length=64)


class PaymentInfoSerializer(serializers.Serializer):
    paymentMethod = PaymentMethodSerializer()
    accountHolderName = serializers.CharField(max_length=100, required=False, allow_blank=True)
    pan = serializers.RegexField(r'^[A-Za-z]{5}\d{4}[A-Za-z]$', required=False, allow_blank=True)

    def validate_accountHolderName(self, v):
        return clean_text(v)


class CodeOfConductSerializer(serializers.Serializer):
    agreed = serializers.BooleanField(required=False, default=False)


class TrainingSerializer(serializers.Serializer):
    quizPassed = serializers.BooleanField(required=False, default=False)


class UploadDocumentSerializer(serializers.Serializer):
    documentType = serializers.CharField(max_length=32)
    url = serializers.URLField(max_length=512)

    def validate_url(self, v):
        if urlparse(v).scheme not in settings.UPLOAD_ALLOWED_SCHEMES:
            raise serializers.ValidationError('Unsupported document URL')
        return v


class VerifyMobileSerializer(serializers.Serializer):
    verificationId = serializers.CharField(max_length=64)
    otp = serializers.CharField(max_length=10)


class ApprovalSerializer(serializers.Serializer):
    approved = serializers.BooleanField()
    rejectionReason = serializers.CharField(required=False, allow_blank=True, max_length=1000)
    adminId = serializers.CharField(required=False, allow_blank=True, max_length=64)

    def validate_rejectionReason(self, v):
        return clean_text(v)
