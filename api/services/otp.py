"""
One-time passwords for login and mobile number confirmation.

Codes live in the Django cache (Redis in production) under a random
verification id, keyed by the target they were sent to.  Only a keyed
hash of the code is stored.
"""
from __future__ import annotations

import logging
import secrets
import time
from typing import Optional

import requests
from django.conf import settings
from django.core.cache import cache
from django.core.mail import send_mail
from django.utils.crypto import constant_time_compare, salted_hmac

from api.exceptions import DeliveryError, ValidationError

logger = logging.getLogger(__name__)

CACHE_PREFIX = 'otp:'
# entries outlive their expiry briefly so an expired code is reported as such
EXPIRY_GRACE_SECONDS = 60


def _hash(verification_id: str, code: str) -> str:
    return salted_hmac('api.services.otp', f'{verification_id}:{code}').hexdigest()


def generate_code(length: Optional[int] = None) -> str:
    length = length or settings.OTP_LENGTH
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


def new_verification_id() -> str:
    return f'verify_{int(time.time() * 1000)}_{secrets.token_hex(5)}'


def clean_phone(phone: str) -> str:
    return phone.replace('+91', '').replace('+', '').strip()


def phone_variants(phone: str) -> set[str]:
    return {phone, phone.replace('+91', ''), phone.replace('+', '')}


# ---------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------
def _send_sms(phone: str, code: str) -> None:
    if not settings.SMS_ENABLE:
        raise RuntimeError('SMS delivery not enabled on server')
    minutes = settings.OTP_TTL_SECONDS // 60
    payload = {
        'route': 'v3',
        'sender_id': settings.SMS_SENDER_ID,
        'message': f'Your Vetician OTP is {code}. Valid for {minutes} minutes.',
        'language': 'english',
        'flash': 0,
        'numbers': clean_phone(phone),
    }
    r = requests.post(
        settings.SMS_API_URL,
        json=payload,
        headers={'authorization': settings.SMS_API_KEY},
        timeout=settings.SMS_TIMEOUT,
    )
    r.raise_for_status()
    data = r.json()
    if data.get('return') is False:
        raise RuntimeError(f"SMS provider error: {data.get('message')}")


def _send_email(email: str, code: str) -> None:
    minutes = settings.OTP_TTL_SECONDS // 60
    send_mail(
        subject='Your Vetician OTP Code',
        message=(
            f'Your OTP code is {code}.\n\n'
            f'This code will expire in {minutes} minutes.\n'
            "If you didn't request this code, please ignore this email."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[email],
    )


# ---------------------------------------------------------------------
# Issue / check
# ---------------------------------------------------------------------
def issue(*, phone: Optional[str] = None, email: Optional[str] = None) -> str:
    """Generate, store and deliver a code; returns the verification id.

    Raises :class:`DeliveryError` when the provider fails; nothing is left
    in the store in that case.
    """
    if not phone and not email:
        raise ValidationError('Phone number or email is required')
    verification_id = new_verification_id()
    code = generate_code()
    ttl = settings.OTP_TTL_SECONDS
    cache.set(
        CACHE_PREFIX + verification_id,
        {
            'phone': phone,
            'email': email.lower() if email else None,
            'hash': _hash(verification_id, code),
            'expires_at': time.time() + ttl,
        },
        timeout=ttl + EXPIRY_GRACE_SECONDS,
    )
    try:
        if phone:
            _send_sms(phone, code)
        else:
            _send_email(email, code)
    except Exception as exc:
        cache.delete(CACHE_PREFIX + verification_id)
        logger.warning('OTP delivery failed for %s: %s', verification_id, exc)
        if phone:
            raise DeliveryError('SMS service temporarily unavailable. Please use email OTP instead.') from exc
        raise DeliveryError('Failed to send email OTP. Please try phone OTP.') from exc
    logger.info('OTP %s issued via %s', verification_id, 'sms' if phone else 'email')
    return verification_id


def check(verification_id: str, code: str, *, phone: Optional[str] = None, email: Optional[str] = None) -> None:
    """Validate a code against its verification id and consume it."""
    key = CACHE_PREFIX + (verification_id or '')
    entry = cache.get(key)
    if not entry:
        raise ValidationError('Invalid or expired verification ID. Please request a new OTP.')
    if time.time() > entry['expires_at']:
        cache.delete(key)
        raise ValidationError('OTP has expired')
    if phone and entry.get('phone') != phone:
        raise ValidationError('Phone number mismatch')
    if email and entry.get('email') != email.lower():
        raise ValidationError('Email mismatch')
    if not constant_time_compare(entry['hash'], _hash(verification_id, str(code))):
        logger.info('OTP %s rejected', verification_id)
        raise ValidationError('Invalid OTP')
    cache.delete(key)
    logger.info('OTP %s verified', verification_id)
