"""
Account lifecycle: registration, login, token rotation, logout and
deletion.

Tokens are simplejwt tokens.  Every refresh token handed out is tracked
as an ``OutstandingToken``; rotation and logout revoke tokens by
blacklisting them.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from api.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from api.models import (
    Account,
    Appointment,
    Clinic,
    DoorstepBooking,
    ParentProfile,
    Paravet,
    Pet,
    PetResort,
    Veterinarian,
)
from api.services import otp as otp_service
from api.services.audit import log_action
from api.services.paravet import create_registration_stub

logger = logging.getLogger(__name__)

LOGIN_ROLES = Account.PUBLIC_ROLES + (Account.ROLE_ADMIN,)


def roles_for(role: str) -> list[str]:
    """Roles an email/role lookup should match; an approved paravet keeps
    logging in as ``paravet``."""
    if role == Account.ROLE_PARAVET:
        return [Account.ROLE_PARAVET, Account.ROLE_VERIFIED_PARAVET]
    return [role]


def public_profile(account: Account) -> dict:
    return {
        'id': account.id,
        'name': account.name,
        'email': account.email,
        'phone': account.phone,
        'role': account.role,
        'isActive': account.is_active,
        'lastLogin': account.last_login,
        'createdAt': account.date_joined,
    }


def issue_tokens(account: Account) -> dict:
    """New access/refresh pair; stamps ``last_login``."""
    refresh = RefreshToken.for_user(account)
    refresh['role'] = account.role
    account.last_login = timezone.now()
    account.save(update_fields=['last_login'])
    return {'token': str(refresh.access_token), 'refreshToken': str(refresh)}


def _find_by_email(email: str, roles: Iterable[str]) -> Optional[Account]:
    # a live account wins over a soft-deleted one with the same key
    return (Account.objects.filter(email=email.lower().strip(), role__in=list(roles))
            .order_by(F('deleted_at').asc(nulls_first=True), 'id').first())


def _check_credentials(email: str, password: str, login_type: str) -> Account:
    if login_type not in LOGIN_ROLES:
        raise ValidationError('Invalid login type specified')
    account = _find_by_email(email, roles_for(login_type))
    if account is None or not account.check_password(password):
        raise AuthenticationError('Invalid email or password')
    if not account.is_active:
        raise AuthenticationError('Account has been deactivated')
    return account


# ---------------------------------------------------------------------
# Registration / login
# ---------------------------------------------------------------------
def _create_role_profile(account: Account) -> None:
    if account.role == Account.ROLE_PET_PARENT:
        ParentProfile.objects.create(user=account, name=account.name, email=account.email, gender='other')
    elif account.role == Account.ROLE_PARAVET:
        create_registration_stub(account)


def register(*, name: str, email: str, password: str, phone: str, role: str = Account.ROLE_PET_PARENT):
    """Create an account and its role profile; returns ``(account, tokens)``.

    A failure while creating the role profile is logged and the
    registration still succeeds.
    """
    if role not in Account.PUBLIC_ROLES:
        raise ValidationError('Invalid role specified')
    email = email.lower().strip()
    try:
        validate_password(password)
    except DjangoValidationError as e:
        raise ValidationError({'password': e.messages})

    if Account.objects.filter(email=email, role__in=roles_for(role), deleted_at__isnull=True).exists():
        raise ConflictError(f'User with this email already exists as a {role}')
    try:
        with transaction.atomic():
            account = Account.objects.create_user(
                username=Account.generate_username(),
                email=email,
                password=password,
                name=name.strip(),
                phone=phone.strip(),
                role=role,
            )
    except IntegrityError:
        raise ConflictError(f'User with this email already exists as a {role}')

    try:
        with transaction.atomic():
            _create_role_profile(account)
    except Exception:
        logger.exception('role profile creation failed for account %s (%s)', account.id, role)

    tokens = issue_tokens(account)
    logger.info('account %s registered as %s', account.id, role)
    return account, tokens


def login(*, email: str, password: str, login_type: str):
    try:
        account = _check_credentials(email, password, login_type)
    except AuthenticationError:
        log_action(user=None, action='login', object_type='account',
                   detail={'result': 'fail', 'email': email, 'loginType': login_type})
        raise
    tokens = issue_tokens(account)
    log_action(user=account, action='login', object_type='account', object_id=account.id,
               detail={'result': 'ok'})
    logger.info('account %s logged in as %s', account.id, account.role)
    return account, tokens


# ---------------------------------------------------------------------
# Refresh tokens
# ---------------------------------------------------------------------
def rotate_refresh_token(raw: str) -> dict:
    """Exchange a refresh token for a new pair; the old one can never be used again.

    Consumption is serialized on the account row so two concurrent
    requests with the same token cannot both succeed.
    """
    try:
        presented = RefreshToken(raw)
    except TokenError as exc:
        raise AuthenticationError('Invalid refresh token') from exc

    user_id = presented.get(jwt_settings.USER_ID_CLAIM)
    jti = presented.get(jwt_settings.JTI_CLAIM)
    with transaction.atomic():
        account = Account.objects.select_for_update().filter(id=user_id).first()
        if account is None or not account.is_active:
            raise AuthenticationError('Invalid refresh token')
        outstanding = OutstandingToken.objects.filter(jti=jti, user=account).first()
        if outstanding is None:
            raise AuthenticationError('Invalid refresh token')
        _, created = BlacklistedToken.objects.get_or_create(token=outstanding)
        if not created:
            raise AuthenticationError('Invalid refresh token')
        tokens = issue_tokens(account)
    logger.info('refresh token rotated for account %s', account.id)
    return tokens


def logout(account: Account, raw: Optional[str] = None) -> None:
    """Revoke one refresh token of ``account``; unknown tokens are ignored."""
    if not raw:
        return
    try:
        token = RefreshToken(raw)
    except TokenError:
        return
    outstanding = OutstandingToken.objects.filter(jti=token.get(jwt_settings.JTI_CLAIM), user=account).first()
    if outstanding is not None:
        BlacklistedToken.objects.get_or_create(token=outstanding)
        logger.info('account %s logged out one session', account.id)


def revoke_all_tokens(account: Account) -> int:
    revoked = 0
    for outstanding in OutstandingToken.objects.filter(user=account, blacklistedtoken__isnull=True):
        _, created = BlacklistedToken.objects.get_or_create(token=outstanding)
        revoked += int(created)
    return revoked


def logout_all(account: Account) -> int:
    revoked = revoke_all_tokens(account)
    logger.info('account %s logged out everywhere (%s tokens)', account.id, revoked)
    return revoked


# ---------------------------------------------------------------------
# Deletion
# ---------------------------------------------------------------------
def delete_account(caller: Account, *, email: str, password: str, login_type: str) -> Account:
    """Remove everything the account owns and soft-delete it, in one transaction."""
    account = _check_credentials(email, password, login_type)
    if account.id != caller.id:
        raise AuthorizationError('You can only delete your own account')

    with transaction.atomic():
        ParentProfile.objects.filter(user=account).delete()
        DoorstepBooking.objects.filter(owner=account).delete()
        Appointment.objects.filter(owner=account).delete()
        Pet.objects.filter(owner=account).delete()
        Clinic.objects.filter(owner=account).delete()
        Veterinarian.objects.filter(user=account).delete()
        PetResort.objects.filter(owner=account).delete()
        Paravet.objects.filter(user=account).delete()

        account.is_active = False
        account.deleted_at = timezone.now()
        account.save(update_fields=['is_active', 'deleted_at'])
        revoke_all_tokens(account)

    log_action(user=account, action='delete_account', object_type='account', object_id=account.id)
    logger.info('account %s deleted', account.id)
    return account


# ---------------------------------------------------------------------
# OTP login
# ---------------------------------------------------------------------
def _find_for_otp(*, phone: Optional[str] = None, email: Optional[str] = None,
                  login_type: Optional[str] = None) -> Optional[Account]:
    qs = Account.objects.filter(is_active=True)
    if login_type:
        qs = qs.filter(role__in=roles_for(login_type))
    if phone:
        qs = qs.filter(phone__in=otp_service.phone_variants(phone))
    else:
        qs = qs.filter(email=email.lower().strip())
    return qs.order_by('id').first()


def send_login_otp(*, phone: Optional[str] = None, email: Optional[str] = None,
                   login_type: Optional[str] = None) -> str:
    if _find_for_otp(phone=phone, email=email, login_type=login_type) is None:
        raise NotFoundError('User not found. Please sign up first.')
    return otp_service.issue(phone=phone, email=email)


def verify_login_otp(*, verification_id: str, otp: str, phone: Optional[str] = None,
                     email: Optional[str] = None, login_type: Optional[str] = None):
    otp_service.check(verification_id, otp, phone=phone, email=email)
    account = _find_for_otp(phone=phone, email=email, login_type=login_type)
    if account is None:
        raise NotFoundError('User not found')
    tokens = issue_tokens(account)
    log_action(user=account, action='otp_login', object_type='account', object_id=account.id)
    return account, tokens
