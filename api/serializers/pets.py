from rest_framework import serializers

from .auth import clean_text


def _number_field(name):
    return serializers.FloatField(
        min_value=0, required=False, allow_null=True,
        error_messages={'invalid': f'{name} must be a valid number'},
    )


class PetSerializer(serializers.Serializer):
    """Pet record in and out.  Field names follow the mobile app."""
    id = serializers.IntegerField(read_only=True)
    userId = serializers.IntegerField(source='owner_id', read_only=True)
    name = serializers.CharField(max_length=100)
    species = serializers.CharField(max_length=50)
    breed = serializers.CharField(max_length=100, required=False, allow_blank=True)
    gender = serializers.CharField(max_length=20)
    dob = serializers.DateField(
        required=False, allow_null=True, input_formats=['%Y-%m-%d'],
        error_messages={'invalid': 'Invalid date format. Please use YYYY-MM-DD'},
    )
    height = _number_field('height')
    weight = _number_field('weight')
    color = serializers.CharField(max_length=50, required=False, allow_blank=True)
    image = serializers.CharField(max_length=512, required=False, allow_blank=True)
    petPhoto = serializers.CharField(max_length=512, required=False, allow_blank=True, source='pet_photo')
    bloodGroup = serializers.CharField(max_length=20, required=False, allow_blank=True, source='blood_group')
    distinctiveFeatures = serializers.CharField(required=False, allow_blank=True, source='distinctive_features')
    allergies = serializers.CharField(required=False, allow_blank=True)
    currentMedications = serializers.CharField(required=False, allow_blank=True, source='current_medications')
    chronicDiseases = serializers.CharField(required=False, allow_blank=True, source='chronic_diseases')
    injuries = serializers.CharField(required=False, allow_blank=True)
    surgeries = serializers.CharField(required=False, allow_blank=True)
    vaccinations = serializers.ListField(child=serializers.DictField(), required=False)
    medicalHistory = serializers.CharField(required=False, allow_blank=True, source='medical_history')
    vaccinationStatus = serializers.CharField(max_length=50, required=False, allow_blank=True,
                                              source='vaccination_status')
    specialNeeds = serializers.CharField(required=False, allow_blank=True, source='special_needs')
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required')
        return v

    def validate_notes(self, v):
        return clean_text(v)


class PetCreateSerializer(PetSerializer):
    userId = serializers.IntegerField(min_value=1, write_only=True)
