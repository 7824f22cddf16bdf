import bleach
from rest_framework import serializers


def clean_text(v):
    return bleach.clean((v or '').strip(), strip=True)


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    phone = serializers.CharField(max_length=20)
    role = serializers.CharField(required=False, default='pet_parent')

    def validate_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Name is required')
        return v

    def validate_phone(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('Phone number is required')
        return v


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    loginType = serializers.CharField()


class DeleteAccountSerializer(LoginSerializer):
    pass


class RefreshTokenSerializer(serializers.Serializer):
    refreshToken = serializers.CharField()


class LogoutSerializer(serializers.Serializer):
    refreshToken = serializers.CharField(required=False, allow_blank=True)


class SendOtpSerializer(serializers.Serializer):
    phoneNumber = serializers.CharField(required=False, allow_blank=True, max_length=20)
    email = serializers.EmailField(required=False, allow_blank=True)
    loginType = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get('phoneNumber') and not attrs.get('email'):
            raise serializers.ValidationError('Phone number or email is required')
        return attrs


class VerifyOtpSerializer(SendOtpSerializer):
    otp = serializers.CharField(max_length=10)
    verificationId = serializers.CharField(max_length=64)


class ParentSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    phone = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    gender = serializers.ChoiceField(choices=['male', 'female', 'other', 'Male', 'Female', 'Other'], required=False)
    image = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=512)
    userId = serializers.IntegerField(required=False, allow_null=True)

    def validate_name(self, v):
        return clean_text(v)

    def validate_address(self, v):
        return clean_text(v) if v else v


class ParentUpdateSerializer(ParentSerializer):
    name = serializers.CharField(max_length=100, required=False)
    email = serializers.EmailField(required=False)
