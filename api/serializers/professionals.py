from rest_framework import serializers

from .auth import clean_text


class VeterinarianRegisterSerializer(serializers.Serializer):
    userId = serializers.IntegerField(min_value=1)
    title = serializers.CharField(max_length=16, required=False, allow_blank=True)
    name = serializers.CharField(max_length=100)
    gender = serializers.CharField(max_length=20)
    city = serializers.CharField(max_length=100)
    experience = serializers.FloatField(min_value=0, max_value=80)
    specialization = serializers.CharField(max_length=100)
    qualification = serializers.CharField(max_length=255)
    registration = serializers.CharField(max_length=64)
    identityProof = serializers.CharField(max_length=512)
    profilePhotoUrl = serializers.CharField(max_length=512, required=False, allow_blank=True)

    def validate_name(self, v):
        return clean_text(v)


class UserIdSerializer(serializers.Serializer):
    userId = serializers.IntegerField(min_value=1)


class ClinicRegisterSerializer(serializers.Serializer):
    userId = serializers.IntegerField(min_value=1)
    clinicName = serializers.CharField(max_length=255, source='clinic_name')
    establishmentType = serializers.CharField(max_length=100, required=False, allow_blank=True,
                                              source='establishment_type')
    city = serializers.CharField(max_length=100)
    locality = serializers.CharField(max_length=255, required=False, allow_blank=True)
    streetAddress = serializers.CharField(max_length=255, source='street_address')
    fees = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    timings = serializers.DictField(required=False)

    def validate_clinicName(self, v):
        return clean_text(v)


class VeterinarianListQuerySerializer(serializers.Serializer):
    city = serializers.CharField(max_length=100, required=False)
    specialization = serializers.CharField(max_length=100, required=False)


class ClinicListQuerySerializer(serializers.Serializer):
    city = serializers.CharField(max_length=100, required=False)
    establishmentType = serializers.CharField(max_length=100, required=False)
    locality = serializers.CharField(max_length=255, required=False)


class PetResortListQuerySerializer(serializers.Serializer):
    city = serializers.CharField(max_length=100, required=False)
    services = serializers.CharField(max_length=512, required=False)

    def validate_services(self, v):
        return [s.strip() for s in v.split(',') if s.strip()]


class PetResortRegisterSerializer(serializers.Serializer):
    userId = serializers.IntegerField(min_value=1)
    resortName = serializers.CharField(max_length=255, source='resort_name')
    brandName = serializers.CharField(max_length=255, source='brand_name')
    logo = serializers.CharField(max_length=512, error_messages={
        'required': 'Resort logo is required',
        'blank': 'Resort logo is required',
    })
    address = serializers.CharField()
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    resortPhone = serializers.CharField(max_length=20, source='resort_phone')
    ownerPhone = serializers.CharField(max_length=20, source='owner_phone')
    services = serializers.ListField(child=serializers.CharField(max_length=64), required=False)
    openingHours = serializers.DictField(required=False, source='opening_hours')
    notice = serializers.CharField(required=False, allow_blank=True)

    def validate_resortName(self, v):
        return clean_text(v)

    def validate_brandName(self, v):
        return clean_text(v)

    def validate_address(self, v):
        return clean_text(v)

    def validate_notice(self, v):
        return clean_text(v)
