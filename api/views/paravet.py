"""
Paravet onboarding views.

Step endpoints act on the profile of ``user_id`` and are open to that
account and to administrators.  Review endpoints are admin only.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from api.exceptions import AuthorizationError
from api.permissions import IsAdminRole, is_owner_or_admin
from api.serializers.paravet import (
    ApprovalSerializer,
    CodeOfConductSerializer,
    ExperienceSkillsSerializer,
    InitializeSerializer,
    PaymentInfoSerializer,
    PersonalInfoSerializer,
    TrainingSerializer,
    UploadDocumentSerializer,
    VerifyMobileSerializer,
)
from api.services import paravet as paravet_service


def _ensure_owner(user, user_id):
    if not is_owner_or_admin(user, user_id):
        raise AuthorizationError('Not authorized to access this paravet profile')


def _ok(message, profile, **extra):
    body = {'success': True, 'data': paravet_service.paravet_to_dict(profile)}
    if message:
        body['message'] = message
    body.update(extra)
    return Response(body)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def initialize(request):
    s = InitializeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    user_id = s.validated_data['userId']
    _ensure_owner(request.user, user_id)
    profile, created = paravet_service.initialize(user_id)
    if not created:
        return _ok('Paravet onboarding already started', profile)
    return Response(
        {'success': True, 'message': 'Paravet onboarding initialized',
         'data': paravet_service.paravet_to_dict(profile)},
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile(request, user_id: int):
    _ensure_owner(request.user, user_id)
    return _ok(None, paravet_service.get_profile(user_id))


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def personal_info(request, user_id: int):
    _ensure_owner(request.user, user_id)
    s = PersonalInfoSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return _ok('Personal info updated', paravet_service.update_personal_info(user_id, s.validated_data))


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def experience_skills(request, user_id: int):
    _ensure_owner(request.user, user_id)
    s = ExperienceSkillsSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return _ok('Experience and skills updated', paravet_service.update_experience_skills(user_id, s.validated_data))


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def payment_info(request, user_id: int):
    _ensure_owner(request.user, user_id)
    s = PaymentInfoSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return _ok('Payment info updated', paravet_service.update_payment_info(user_id, s.validated_data))


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def code_of_conduct(request, user_id: int):
    _ensure_owner(request.user, user_id)
    s = CodeOfConductSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return _ok('Code of conduct accepted',
               paravet_service.agree_to_code_of_conduct(user_id, s.validated_data['agreed']))


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def training(request, user_id: int):
    _ensure_owner(request.user, user_id)
    s = TrainingSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    quiz_passed = s.validated_data['quizPassed']
    profile = paravet_service.complete_training_module(user_id, quiz_passed)
    return _ok('Training module completed', profile, badgeEarned=quiz_passed)


@api_view(['PATCH'])
@permission_classes([AllowAny])
def upload_documents(request, user_id: int):
    s = UploadDocumentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    document_type = s.validated_data['documentType']
    profile = paravet_service.upload_document(user_id, document_type, s.validated_data['url'])
    return _ok(f'{document_type} uploaded successfully', profile)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_mobile_otp(request, user_id: int):
    _ensure_owner(request.user, user_id)
    verification_id = paravet_service.send_mobile_otp(user_id)
    return Response({'success': True, 'message': 'OTP sent successfully', 'verificationId': verification_id})

send_mobile_otp.cls.throttle_scope = 'otp'


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def verify_mobile(request, user_id: int):
    _ensure_owner(request.user, user_id)
    s = VerifyMobileSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    profile = paravet_service.verify_mobile(
        user_id, verification_id=s.validated_data['verificationId'], otp=s.validated_data['otp'],
    )
    return _ok('Mobile number verified', profile)

verify_mobile.cls.throttle_scope = 'otp'


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def submit(request, user_id: int):
    _ensure_owner(request.user, user_id)
    profile = paravet_service.submit_application(user_id)
    return _ok(
        'Application submitted for review. You will receive updates via email and SMS.',
        profile,
        estimatedReviewTime=paravet_service.ESTIMATED_REVIEW_TIME,
    )


# ---------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_unverified(request):
    paravets = paravet_service.list_under_review()
    return Response({'success': True, 'count': len(paravets), 'data': paravets})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_verify(request, pk: int):
    s = ApprovalSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    approved = s.validated_data['approved']
    profile = paravet_service.decide(
        pk,
        approved,
        rejection_reason=s.validated_data.get('rejectionReason', ''),
        admin_id=s.validated_data.get('adminId') or None,
        admin=request.user,
    )
    return _ok('Paravet approved' if approved else 'Paravet rejected', profile)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_verify_field(request, pk: int, field: str):
    profile = paravet_service.verify_field(pk, field, admin=request.user)
    return _ok(f'{field} verified', profile)
