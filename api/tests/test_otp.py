import re
import time

import pytest
import requests
from django.core import mail
from django.core.cache import cache
from django.urls import reverse

from api.models import Account
from api.services import otp

pytestmark = pytest.mark.django_db


@pytest.fixture
def fixed_code(monkeypatch):
    monkeypatch.setattr(otp, 'generate_code', lambda length=None: '424242')
    return '424242'


@pytest.fixture
def sms_outbox(monkeypatch):
    sent = []
    monkeypatch.setattr(otp, '_send_sms', lambda phone, code: sent.append((phone, code)))
    return sent


def test_generate_code_has_configured_length(settings):
    settings.OTP_LENGTH = 6
    code = otp.generate_code()
    assert len(code) == 6 and code.isdigit()
    assert len(otp.generate_code(4)) == 4


def test_store_keeps_only_a_hash(sms_outbox):
    verification_id = otp.issue(phone='9876543210')
    code = sms_outbox[0][1]
    entry = cache.get(otp.CACHE_PREFIX + verification_id)
    assert entry['phone'] == '9876543210'
    assert set(entry) == {'phone', 'email', 'hash', 'expires_at'}
    assert entry['hash'] != code and len(entry['hash']) > len(code)
    assert verification_id.startswith('verify_')


def test_email_otp_login(api_client, make_account):
    account = make_account(Account.ROLE_PET_PARENT, email='otp@example.com')
    r = api_client.post(reverse('send_otp_view'), {'email': 'otp@example.com'}, format='json')
    assert r.status_code == 200
    assert r.data['message'] == 'OTP sent successfully to your email'
    assert len(mail.outbox) == 1
    code = re.search(r'\b(\d{6})\b', mail.outbox[0].body).group(1)

    r = api_client.post(reverse('verify_otp_view'), {
        'email': 'otp@example.com', 'otp': code, 'verificationId': r.data['verificationId'],
    }, format='json')
    assert r.status_code == 200
    assert r.data['user']['id'] == account.id
    assert r.data['token'] and r.data['refreshToken']


def test_phone_otp_login_is_single_use(api_client, make_account, fixed_code, sms_outbox):
    make_account(Account.ROLE_VETERINARIAN, phone='9876500000')
    r = api_client.post(reverse('send_otp_view'), {'phoneNumber': '+919876500000', 'loginType': 'veterinarian'},
                        format='json')
    assert r.status_code == 200
    assert sms_outbox == [('+919876500000', fixed_code)]
    body = {'phoneNumber': '+919876500000', 'otp': fixed_code, 'verificationId': r.data['verificationId'],
            'loginType': 'veterinarian'}
    assert api_client.post(reverse('verify_otp_view'), body, format='json').status_code == 200
    again = api_client.post(reverse('verify_otp_view'), body, format='json')
    assert again.status_code == 400
    assert again.data['message'] == 'Invalid or expired verification ID. Please request a new OTP.'


def test_send_otp_unknown_user(api_client):
    r = api_client.post(reverse('send_otp_view'), {'email': 'ghost@example.com'}, format='json')
    assert r.status_code == 404
    assert r.data['message'] == 'User not found. Please sign up first.'


def test_send_otp_requires_a_target(api_client):
    assert api_client.post(reverse('send_otp_view'), {}, format='json').status_code == 400


def test_wrong_code_mismatch_and_expiry(fixed_code, sms_outbox):
    verification_id = otp.issue(phone='9876543210')
    with pytest.raises(otp.ValidationError, match='Invalid OTP'):
        otp.check(verification_id, '000000', phone='9876543210')
    with pytest.raises(otp.ValidationError, match='Phone number mismatch'):
        otp.check(verification_id, fixed_code, phone='9000000000')

    key = otp.CACHE_PREFIX + verification_id
    entry = cache.get(key)
    cache.set(key, {**entry, 'expires_at': time.time() - 1}, 300)
    with pytest.raises(otp.ValidationError, match='OTP has expired'):
        otp.check(verification_id, fixed_code, phone='9876543210')
    assert cache.get(otp.CACHE_PREFIX + verification_id) is None


def test_sms_disabled_reports_delivery_failure(api_client, make_account, settings):
    settings.SMS_ENABLE = False
    make_account(Account.ROLE_PET_PARENT, phone='9876511111')
    r = api_client.post(reverse('send_otp_view'), {'phoneNumber': '9876511111'}, format='json')
    assert r.status_code == 502
    assert r.data['message'] == 'SMS service temporarily unavailable. Please use email OTP instead.'
    assert r.data['error']['code'] == 'delivery_failed'


def test_sms_provider_call(settings, monkeypatch):
    settings.SMS_ENABLE = True
    settings.SMS_API_KEY = 'k'
    calls = []

    class FakeResponse:
        def raise_for_status(self):
            pass

        def json(self):
            return {'return': True}

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append((url, json, headers, timeout))
        return FakeResponse()

    monkeypatch.setattr(requests, 'post', fake_post)
    otp.issue(phone='+919876543210')
    url, payload, headers, timeout = calls[0]
    assert url == settings.SMS_API_URL
    assert payload['numbers'] == '9876543210'
    assert headers == {'authorization': 'k'}
    assert timeout == settings.SMS_TIMEOUT
