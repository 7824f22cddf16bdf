"""
Paravet onboarding.

Each step handler replaces one JSON field group of the
:class:`~api.models.Paravet` record, moves the advisory ``current_step``
marker and recomputes the completion percentage.  Steps may be called in
any order and repeated; only submission is gated.
"""
from __future__ import annotations

import logging
import math
from typing import Any

from django.db import transaction
from django.utils import timezone

from api.exceptions import NotFoundError, ValidationError
from api.models import Account, Paravet
from api.services import otp as otp_service
from api.services.audit import log_action
from api.services.verification import PARAVET_AGGREGATE, account_summary

logger = logging.getLogger(__name__)

TRAINING_BADGE = 'Vetician Verified Paravet'
ESTIMATED_REVIEW_TIME = '24-48 hours'

DOCUMENT_TYPES = ('governmentId', 'certificationProof', 'vetRecommendation', 'profilePhoto')
# these two count as identity proof and carry a ``type`` marker
TYPED_DOCUMENTS = ('governmentId', 'certificationProof')

# front-end group name -> model field
GROUP_FIELDS = {
    'personalInfo': 'personal_info',
    'documents': 'documents',
    'experience': 'experience',
    'paymentInfo': 'payment_info',
    'compliance': 'compliance',
    'training': 'training',
}

STEP_PERSONAL_INFO = 3
STEP_EXPERIENCE = 5
STEP_PAYMENT = 6
STEP_CODE_OF_CONDUCT = 7
STEP_TRAINING = 8
STEP_SUBMITTED = 9


def _wrap(value: Any) -> dict:
    return {'value': value, 'verified': False}


def _value(group: dict, key: str, attr: str = 'value') -> Any:
    node = group.get(key)
    return node.get(attr) if isinstance(node, dict) else None


def _now_iso() -> str:
    return timezone.now().isoformat()


# ---------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------
def completion_predicates(profile: Paravet) -> list[bool]:
    personal = profile.personal_info or {}
    mobile = personal.get('mobileNumber') if isinstance(personal.get('mobileNumber'), dict) else {}
    return [
        bool(_value(personal, 'fullName')),
        bool(mobile.get('value')) and mobile.get('otpVerified') is True,
        bool(_value(profile.documents or {}, 'governmentId', 'type')),
        bool(_value(profile.experience or {}, 'yearsOfExperience')),
        bool(_value(profile.payment_info or {}, 'accountHolderName')),
        bool(_value(profile.compliance or {}, 'agreedToCodeOfConduct')),
        (profile.training or {}).get('moduleCompleted') is True,
        bool(profile.submitted),
    ]


def calculate_completion(profile: Paravet) -> int:
    """Set and return ``completion_percentage`` from the eight predicates."""
    steps = completion_predicates(profile)
    # halves round up: 1 of 8 is 13
    profile.completion_percentage = math.floor(100 * sum(steps) / len(steps) + 0.5)
    return profile.completion_percentage


def missing_for_submission(profile: Paravet) -> list[str]:
    personal = profile.personal_info or {}
    documents = profile.documents or {}
    checks = {
        'personalInfo.fullName': _value(personal, 'fullName'),
        'personalInfo.mobileNumber': _value(personal, 'mobileNumber'),
        'documents.governmentId': _value(documents, 'governmentId', 'type'),
        'documents.certificationProof': _value(documents, 'certificationProof', 'type'),
        'experience.yearsOfExperience': _value(profile.experience or {}, 'yearsOfExperience'),
        'paymentInfo.accountHolderName': _value(profile.payment_info or {}, 'accountHolderName'),
        'compliance.agreedToCodeOfConduct': _value(profile.compliance or {}, 'agreedToCodeOfConduct'),
    }
    return [path for path, value in checks.items() if not value]


# ---------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------
def field_groups(profile: Paravet) -> dict:
    return {name: getattr(profile, field) or {} for name, field in GROUP_FIELDS.items()}


def paravet_to_dict(profile: Paravet) -> dict:
    groups = field_groups(profile)
    data = {'_id': profile.id, 'userId': profile.user_id}
    data.update(groups)
    data['applicationStatus'] = {
        'currentStep': profile.current_step,
        'completionPercentage': profile.completion_percentage,
        'submitted': profile.submitted,
        'submittedAt': profile.submitted_at,
        'approvalStatus': profile.approval_status,
        'approvedAt': profile.approved_at,
        'rejectionReason': profile.rejection_reason or None,
        'approvedByAdmin': profile.approved_by_admin or None,
    }
    data['fullyVerified'] = PARAVET_AGGREGATE.is_verified(groups)
    data['isActive'] = profile.is_active
    data['createdAt'] = profile.created_at
    data['lastUpdated'] = profile.last_updated
    return data


# ---------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------
def _account_or_404(user_id) -> Account:
    account = Account.objects.filter(id=user_id, deleted_at__isnull=True).first()
    if account is None:
        raise NotFoundError('User not found')
    return account


def get_profile(user_id) -> Paravet:
    profile = Paravet.objects.filter(user_id=user_id).first()
    if profile is None:
        raise NotFoundError('Paravet profile not found')
    return profile


def _save(profile: Paravet, *fields: str) -> Paravet:
    calculate_completion(profile)
    profile.save(update_fields=[*fields, 'completion_percentage', 'last_updated'])
    return profile


# ---------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------
def initialize(user_id) -> tuple[Paravet, bool]:
    """Create the profile if absent; returns ``(profile, created)``."""
    account = _account_or_404(user_id)
    profile, created = Paravet.objects.get_or_create(user=account)
    if created:
        logger.info('paravet onboarding started for account %s', account.id)
    return profile, created


def create_registration_stub(account: Account) -> Paravet:
    """Profile created at sign-up: name and email pre-filled and approved."""
    now = timezone.now()
    profile = Paravet(
        user=account,
        personal_info={
            'fullName': {'value': account.name, 'verified': True},
            'email': {'value': account.email, 'verified': True},
        },
        current_step=1,
        approval_status=Paravet.STATUS_APPROVED,
        approved_at=now,
        is_active=True,
    )
    calculate_completion(profile)
    profile.save()
    return profile


def update_personal_info(user_id, data: dict) -> Paravet:
    profile = get_profile(user_id)
    profile.personal_info = {
        'fullName': _wrap(data.get('fullName')),
        'mobileNumber': {'value': data.get('mobileNumber'), 'verified': False, 'otpVerified': False},
        'email': _wrap(data.get('email')),
        'city': _wrap(data.get('city')),
        'serviceArea': _wrap(data.get('serviceArea')),
        'emergencyContact': {**(data.get('emergencyContact') or {}), 'verified': False},
    }
    profile.current_step = STEP_PERSONAL_INFO
    return _save(profile, 'personal_info', 'current_step')


def update_experience_skills(user_id, data: dict) -> Paravet:
    profile = get_profile(user_id)
    profile.experience = {
        'yearsOfExperience': _wrap(data.get('yearsOfExperience')),
        'areasOfExpertise': _wrap(sorted(set(data.get('areasOfExpertise') or []))),
        'languagesSpoken': _wrap(list(data.get('languagesSpoken') or [])),
        'availability': {**(data.get('availability') or {}), 'verified': False},
    }
    profile.current_step = STEP_EXPERIENCE
    return _save(profile, 'experience', 'current_step')


def update_payment_info(user_id, data: dict) -> Paravet:
    profile = get_profile(user_id)
    method = data.get('paymentMethod') or {}
    profile.payment_info = {
        'paymentMethod': {'type': method.get('type'), 'value': method.get('value'), 'verified': False},
        'accountHolderName': _wrap(data.get('accountHolderName')),
        'pan': _wrap(data.get('pan')),
    }
    profile.current_step = STEP_PAYMENT
    return _save(profile, 'payment_info', 'current_step')


def agree_to_code_of_conduct(user_id, agreed: bool) -> Paravet:
    if not agreed:
        raise ValidationError('Must agree to code of conduct to proceed')
    profile = get_profile(user_id)
    profile.compliance = {
        'agreedToCodeOfConduct': {'value': True, 'agreedAt': _now_iso(), 'verified': False},
    }
    profile.current_step = STEP_CODE_OF_CONDUCT
    return _save(profile, 'compliance', 'current_step')


def complete_training_module(user_id, quiz_passed: bool = False) -> Paravet:
    profile = get_profile(user_id)
    profile.training = {
        'moduleCompleted': True,
        'quizPassed': bool(quiz_passed),
        'completedAt': _now_iso(),
        'badgeEarned': TRAINING_BADGE if quiz_passed else None,
    }
    profile.current_step = STEP_TRAINING
    return _save(profile, 'training', 'current_step')


def upload_document(user_id, document_type: str, url: str) -> Paravet:
    if document_type not in DOCUMENT_TYPES:
        raise ValidationError('Invalid document type')
    account = _account_or_404(user_id)
    profile, _ = Paravet.objects.get_or_create(user=account)
    entry = {'url': url, 'verified': False}
    if document_type in TYPED_DOCUMENTS:
        entry = {'type': 'uploaded', **entry}
    profile.documents = {**(profile.documents or {}), document_type: entry}
    logger.info('paravet %s uploaded %s', profile.id, document_type)
    return _save(profile, 'documents')


def send_mobile_otp(user_id) -> str:
    """Send an OTP to the mobile number on the profile; returns the verification id."""
    profile = get_profile(user_id)
    mobile = _value(profile.personal_info or {}, 'mobileNumber')
    if not mobile:
        raise ValidationError('Mobile number is required before verification')
    return otp_service.issue(phone=mobile)


def verify_mobile(user_id, *, verification_id: str, otp: str) -> Paravet:
    profile = get_profile(user_id)
    personal = dict(profile.personal_info or {})
    mobile = personal.get('mobileNumber')
    if not isinstance(mobile, dict) or not mobile.get('value'):
        raise ValidationError('Mobile number is required before verification')
    otp_service.check(verification_id, otp, phone=mobile['value'])
    personal['mobileNumber'] = {**mobile, 'otpVerified': True}
    profile.personal_info = personal
    logger.info('paravet %s mobile number confirmed by OTP', profile.id)
    return _save(profile, 'personal_info')


def submit_application(user_id) -> Paravet:
    profile = get_profile(user_id)
    missing = missing_for_submission(profile)
    if missing:
        raise ValidationError({'detail': 'Please complete all required steps before submitting',
                               'missing': missing})
    profile.submitted = True
    profile.submitted_at = timezone.now()
    profile.approval_status = Paravet.STATUS_UNDER_REVIEW
    profile.rejection_reason = ''
    profile.approved_at = None
    profile.approved_by_admin = ''
    profile.current_step = STEP_SUBMITTED
    _save(profile, 'submitted', 'submitted_at', 'approval_status', 'rejection_reason',
          'approved_at', 'approved_by_admin', 'current_step')
    logger.info('paravet %s submitted for review', profile.id)
    return profile


# ---------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------
def list_under_review() -> list[dict]:
    out = []
    qs = Paravet.objects.filter(approval_status=Paravet.STATUS_UNDER_REVIEW).select_related('user')
    for profile in qs.order_by('submitted_at'):
        item = paravet_to_dict(profile)
        item['user'] = account_summary(profile.user)
        out.append(item)
    return out


def verify_field(profile_id, field_path: str, *, admin: Account | None = None) -> Paravet:
    """Set ``verified`` on the wrapper found at a dotted path such as
    ``personalInfo.fullName`` or ``documents.governmentId``."""
    profile = Paravet.objects.filter(id=profile_id).first()
    if profile is None:
        raise NotFoundError('Paravet not found')

    group_name, _, rest = field_path.partition('.')
    model_field = GROUP_FIELDS.get(group_name)
    if model_field is None or not rest:
        raise NotFoundError(f'Field {field_path} not found')

    group = dict(getattr(profile, model_field) or {})
    node = group
    segments = rest.split('.')
    for segment in segments[:-1]:
        node = node.get(segment) if isinstance(node, dict) else None
        if not isinstance(node, dict):
            raise NotFoundError(f'Field {field_path} not found')
    target = node.get(segments[-1]) if isinstance(node, dict) else None
    if not isinstance(target, dict):
        raise NotFoundError(f'Field {field_path} not found')
    target['verified'] = True

    setattr(profile, model_field, group)
    _save(profile, model_field)
    logger.info('paravet %s field %s verified', profile.id, field_path)
    log_action(user=admin, action='verify_paravet_field', object_type='paravet',
               object_id=profile.id, detail={'field': field_path})
    return profile


def decide(profile_id, approved: bool, *, rejection_reason: str = '', admin_id: str | None = None,
           admin: Account | None = None) -> Paravet:
    """Approve or reject an application.

    Approval also promotes the linked account to ``verified_paravet``;
    rejection leaves the account untouched.
    """
    with transaction.atomic():
        profile = Paravet.objects.select_for_update().filter(id=profile_id).first()
        if profile is None:
            raise NotFoundError('Paravet not found')
        if approved:
            profile.approval_status = Paravet.STATUS_APPROVED
            profile.approved_at = timezone.now()
            profile.approved_by_admin = str(admin_id or (admin.id if admin else ''))
            profile.rejection_reason = ''
            Account.objects.filter(id=profile.user_id).update(role=Account.ROLE_VERIFIED_PARAVET)
        else:
            profile.approval_status = Paravet.STATUS_REJECTED
            profile.approved_at = None
            profile.approved_by_admin = ''
            profile.rejection_reason = rejection_reason or ''
        profile.save(update_fields=['approval_status', 'approved_at', 'approved_by_admin',
                                    'rejection_reason', 'last_updated'])

    logger.info('paravet %s %s', profile.id, profile.approval_status)
    log_action(user=admin, action='approve_paravet' if approved else 'reject_paravet',
               object_type='paravet', object_id=profile.id,
               detail={'approvedByAdmin': profile.approved_by_admin, 'rejectionReason': profile.rejection_reason})
    return profile
