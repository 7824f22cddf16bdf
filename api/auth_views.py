"""
Authentication views.

Registration, password and OTP login, refresh token rotation, logout
and account deletion.  The business rules live in
``api.services.accounts``; these views validate input and shape the
responses expected by the front-end.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from api.serializers.auth import (
    DeleteAccountSerializer,
    LoginSerializer,
    LogoutSerializer,
    RefreshTokenSerializer,
    RegisterSerializer,
    SendOtpSerializer,
    VerifyOtpSerializer,
)
from api.services import accounts


def _session_payload(message: str, account, tokens: dict) -> dict:
    return {
        'success': True,
        'message': message,
        'user': accounts.public_profile(account),
        **tokens,
    }


@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    account, tokens = accounts.register(**s.validated_data)
    return Response(_session_payload('User registered successfully', account, tokens),
                    status=status.HTTP_201_CREATED)

register_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    account, tokens = accounts.login(email=vd['email'], password=vd['password'], login_type=vd['loginType'])
    return Response(_session_payload('Login successful', account, tokens))

# ScopedRateThrottle reads throttle_scope from the view class
login_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_token_view(request):
    s = RefreshTokenSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    tokens = accounts.rotate_refresh_token(s.validated_data['refreshToken'])
    return Response({'success': True, **tokens})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    s = LogoutSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    accounts.logout(request.user, s.validated_data.get('refreshToken'))
    return Response({'success': True, 'message': 'Logged out successfully'})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_all_view(request):
    accounts.logout_all(request.user)
    return Response({'success': True, 'message': 'Logged out from all devices successfully'})


@api_view(['DELETE', 'POST'])
@permission_classes([IsAuthenticated])
def delete_account_view(request):
    s = DeleteAccountSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    account = accounts.delete_account(request.user, email=vd['email'], password=vd['password'],
                                      login_type=vd['loginType'])
    return Response({
        'success': True,
        'message': 'Account and all associated data deleted successfully',
        'data': {'userId': account.id, 'email': account.email, 'deletedAt': account.deleted_at},
    })


@api_view(['POST'])
@permission_classes([AllowAny])
def send_otp_view(request):
    s = SendOtpSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    phone = vd.get('phoneNumber') or None
    verification_id = accounts.send_login_otp(
        phone=phone, email=vd.get('email') or None, login_type=vd.get('loginType') or None,
    )
    message = 'OTP sent successfully' if phone else 'OTP sent successfully to your email'
    return Response({'success': True, 'message': message, 'verificationId': verification_id})

send_otp_view.cls.throttle_scope = 'otp'


@api_view(['POST'])
@permission_classes([AllowAny])
def verify_otp_view(request):
    s = VerifyOtpSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    account, tokens = accounts.verify_login_otp(
        verification_id=vd['verificationId'],
        otp=vd['otp'],
        phone=vd.get('phoneNumber') or None,
        email=vd.get('email') or None,
        login_type=vd.get('loginType') or None,
    )
    return Response(_session_payload('OTP verified successfully', account, tokens))

verify_otp_view.cls.throttle_scope = 'otp'
