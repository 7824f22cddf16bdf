import itertools

import pytest
from rest_framework.test import APIClient
from rest_framework.throttling import ScopedRateThrottle

from api.models import Account, AuditEvent, Paravet
from api.services import otp
from api.services import paravet as paravet_service

pytestmark = pytest.mark.django_db

PERSONAL = {
    'fullName': 'A',
    'mobileNumber': '9999999999',
    'email': 'a@example.com',
    'city': 'Pune',
    'serviceArea': 'Kothrud',
    'emergencyContact': {'name': 'B', 'number': '8888888888'},
}
EXPERIENCE = {
    'yearsOfExperience': 3,
    'areasOfExpertise': ['vaccination', 'first aid', 'vaccination'],
    'languagesSpoken': ['Hindi', 'English'],
    'availability': {'days': ['Mon', 'Tue'], 'startTime': '09:00', 'endTime': '17:00'},
}
PAYMENT = {
    'paymentMethod': {'type': 'upi', 'value': 'a@upi'},
    'accountHolderName': 'A',
    'pan': 'ABCDE1234F',
}


@pytest.fixture
def paravet(make_account):
    return make_account(Account.ROLE_PARAVET)


@pytest.fixture
def pv_client(auth_client, paravet):
    return auth_client(paravet)


def started(client, account):
    r = client.post('/api/paravet/initialize', {'userId': account.id}, format='json')
    assert r.status_code in (200, 201)
    return r


def upload(user_id, document_type, url='https://cdn.example.com/doc.pdf'):
    return APIClient().patch(f'/api/paravet/upload-documents/{user_id}',
                             {'documentType': document_type, 'url': url}, format='json')


def expected_completion(profile):
    return int(100 * sum(paravet_service.completion_predicates(profile)) / 8 + 0.5)


# ---------------------------------------------------------------------
# Completion is a pure function of the predicates
# ---------------------------------------------------------------------
STEPS = {
    'personal': lambda uid: paravet_service.update_personal_info(uid, PERSONAL),
    'experience': lambda uid: paravet_service.update_experience_skills(uid, EXPERIENCE),
    'payment': lambda uid: paravet_service.update_payment_info(uid, PAYMENT),
    'conduct': lambda uid: paravet_service.agree_to_code_of_conduct(uid, True),
    'training': lambda uid: paravet_service.complete_training_module(uid, True),
    'document': lambda uid: paravet_service.upload_document(uid, 'governmentId', 'https://x.example/id.png'),
}


@pytest.mark.parametrize('order', list(itertools.permutations(['personal', 'document', 'training', 'conduct']))[:8])
def test_completion_matches_predicates_in_any_order(paravet, order):
    paravet_service.initialize(paravet.id)
    for done, step in enumerate(order, start=1):
        profile = STEPS[step](paravet.id)
        assert profile.completion_percentage == expected_completion(profile)
        assert profile.completion_percentage == int(100 * done / 8 + 0.5)
    stored = Paravet.objects.get(user=paravet)
    assert stored.completion_percentage == 50


def test_completion_rounds_halves_up(paravet):
    profile, _ = paravet_service.initialize(paravet.id)
    assert paravet_service.calculate_completion(profile) == 0
    profile = STEPS['personal'](paravet.id)
    assert profile.completion_percentage == 13
    STEPS['experience'](paravet.id)
    profile = STEPS['payment'](paravet.id)
    assert profile.completion_percentage == 38


# ---------------------------------------------------------------------
# Step endpoints
# ---------------------------------------------------------------------
def test_initialize_is_idempotent(pv_client, paravet):
    first = started(pv_client, paravet)
    assert first.status_code == 201
    second = started(pv_client, paravet)
    assert second.status_code == 200
    assert second.data['message'] == 'Paravet onboarding already started'
    assert Paravet.objects.filter(user=paravet).count() == 1


def test_profile_not_found(pv_client, paravet):
    r = pv_client.get(f'/api/paravet/profile/{paravet.id}')
    assert r.status_code == 404
    assert r.data['message'] == 'Paravet profile not found'


def test_personal_info_wraps_values(pv_client, paravet):
    started(pv_client, paravet)
    r = pv_client.patch(f'/api/paravet/personal-info/{paravet.id}', PERSONAL, format='json')
    assert r.status_code == 200
    info = r.data['data']['personalInfo']
    assert info['fullName'] == {'value': 'A', 'verified': False}
    assert info['mobileNumber'] == {'value': '9999999999', 'verified': False, 'otpVerified': False}
    assert info['emergencyContact'] == {'name': 'B', 'number': '8888888888', 'verified': False}
    assert r.data['data']['applicationStatus']['currentStep'] == 3


def test_personal_info_rejects_bad_mobile(pv_client, paravet):
    started(pv_client, paravet)
    r = pv_client.patch(f'/api/paravet/personal-info/{paravet.id}', {'mobileNumber': '12ab'}, format='json')
    assert r.status_code == 400


def test_experience_deduplicates_expertise(pv_client, paravet):
    started(pv_client, paravet)
    r = pv_client.patch(f'/api/paravet/experience-skills/{paravet.id}', EXPERIENCE, format='json')
    assert r.status_code == 200
    assert r.data['data']['experience']['areasOfExpertise']['value'] == ['first aid', 'vaccination']
    assert r.data['data']['applicationStatus']['currentStep'] == 5


def test_code_of_conduct_requires_agreement(pv_client, paravet):
    started(pv_client, paravet)
    r = pv_client.patch(f'/api/paravet/code-of-conduct/{paravet.id}', {'agreed': False}, format='json')
    assert r.status_code == 400
    assert r.data['message'] == 'Must agree to code of conduct to proceed'
    r = pv_client.patch(f'/api/paravet/code-of-conduct/{paravet.id}', {'agreed': True}, format='json')
    assert r.status_code == 200
    assert r.data['data']['compliance']['agreedToCodeOfConduct']['value'] is True


def test_training_badge_only_when_quiz_passed(pv_client, paravet):
    started(pv_client, paravet)
    r = pv_client.patch(f'/api/paravet/training/{paravet.id}', {'quizPassed': False}, format='json')
    assert r.data['data']['training']['badgeEarned'] is None
    assert r.data['badgeEarned'] is False
    r = pv_client.patch(f'/api/paravet/training/{paravet.id}', {'quizPassed': True}, format='json')
    assert r.data['data']['training']['badgeEarned'] == 'Vetician Verified Paravet'
    assert r.data['data']['applicationStatus']['currentStep'] == 8


def test_upload_documents_creates_profile_and_types_entries(paravet):
    r = upload(paravet.id, 'governmentId')
    assert r.status_code == 200
    assert r.data['data']['documents']['governmentId'] == {
        'type': 'uploaded', 'url': 'https://cdn.example.com/doc.pdf', 'verified': False,
    }
    r = upload(paravet.id, 'profilePhoto')
    assert r.data['data']['documents']['profilePhoto'] == {'url': 'https://cdn.example.com/doc.pdf', 'verified': False}


def test_upload_documents_validation(paravet):
    assert upload(paravet.id, 'passport').status_code == 400
    assert upload(paravet.id, 'governmentId', url='ftp://files.example.com/id.png').status_code == 400


def test_steps_require_owner_or_admin(paravet, make_account, auth_client, admin_client):
    started(auth_client(paravet), paravet)
    stranger = auth_client(make_account(Account.ROLE_PARAVET))
    r = stranger.patch(f'/api/paravet/personal-info/{paravet.id}', PERSONAL, format='json')
    assert r.status_code == 403
    r = admin_client.get(f'/api/paravet/profile/{paravet.id}')
    assert r.status_code == 200


def test_verify_mobile_is_rate_limited(pv_client, paravet, monkeypatch):
    monkeypatch.setattr(ScopedRateThrottle, 'THROTTLE_RATES', {**ScopedRateThrottle.THROTTLE_RATES, 'otp': '2/min'})
    paravet_service.initialize(paravet.id)
    body = {'verificationId': 'verify_1_abc', 'otp': '123456'}
    codes = [pv_client.post(f'/api/paravet/verify-mobile/{paravet.id}', body, format='json').status_code
             for _ in range(3)]
    assert 429 not in codes[:2]
    assert codes[2] == 429


def test_mobile_otp_confirms_number(pv_client, paravet, monkeypatch):
    sent = []
    monkeypatch.setattr(otp, 'generate_code', lambda length=None: '123456')
    monkeypatch.setattr(otp, '_send_sms', lambda phone, code: sent.append((phone, code)))
    started(pv_client, paravet)
    pv_client.patch(f'/api/paravet/personal-info/{paravet.id}', PERSONAL, format='json')

    r = pv_client.post(f'/api/paravet/send-mobile-otp/{paravet.id}')
    assert r.status_code == 200
    assert sent == [('9999999999', '123456')]
    verification_id = r.data['verificationId']

    bad = pv_client.post(f'/api/paravet/verify-mobile/{paravet.id}',
                         {'verificationId': verification_id, 'otp': '000000'}, format='json')
    assert bad.status_code == 400
    ok = pv_client.post(f'/api/paravet/verify-mobile/{paravet.id}',
                        {'verificationId': verification_id, 'otp': '123456'}, format='json')
    assert ok.status_code == 200
    assert ok.data['data']['personalInfo']['mobileNumber']['otpVerified'] is True
    assert ok.data['data']['applicationStatus']['completionPercentage'] == 25


# ---------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------
def test_submission_scenario(pv_client, paravet):
    started(pv_client, paravet)
    pv_client.patch(f'/api/paravet/personal-info/{paravet.id}', PERSONAL, format='json')

    r = pv_client.post(f'/api/paravet/submit/{paravet.id}')
    assert r.status_code == 400
    assert r.data['message'] == 'Please complete all required steps before submitting'
    assert set(r.data['error']['details']['missing']) == {
        'documents.governmentId',
        'documents.certificationProof',
        'experience.yearsOfExperience',
        'paymentInfo.accountHolderName',
        'compliance.agreedToCodeOfConduct',
    }
    assert Paravet.objects.get(user=paravet).approval_status == Paravet.STATUS_PENDING

    pv_client.patch(f'/api/paravet/code-of-conduct/{paravet.id}', {'agreed': True}, format='json')
    upload(paravet.id, 'certificationProof')
    pv_client.patch(f'/api/paravet/payment-info/{paravet.id}', PAYMENT, format='json')
    upload(paravet.id, 'governmentId')
    pv_client.patch(f'/api/paravet/experience-skills/{paravet.id}', EXPERIENCE, format='json')

    r = pv_client.post(f'/api/paravet/submit/{paravet.id}')
    assert r.status_code == 200
    status = r.data['data']['applicationStatus']
    assert status['approvalStatus'] == 'under_review'
    assert status['currentStep'] == 9
    assert status['submitted'] is True
    assert r.data['estimatedReviewTime'] == '24-48 hours'


@pytest.mark.parametrize('skip', ['personal', 'governmentId', 'certificationProof', 'experience', 'payment', 'conduct'])
def test_submission_gated_on_each_required_field(paravet, skip):
    paravet_service.initialize(paravet.id)
    if skip != 'personal':
        STEPS['personal'](paravet.id)
    for doc in ('governmentId', 'certificationProof'):
        if skip != doc:
            paravet_service.upload_document(paravet.id, doc, 'https://x.example/d.png')
    for step in ('experience', 'payment', 'conduct'):
        if skip != step:
            STEPS[step](paravet.id)
    with pytest.raises(paravet_service.ValidationError):
        paravet_service.submit_application(paravet.id)
    assert Paravet.objects.get(user=paravet).submitted is False


def submitted_profile(account):
    paravet_service.initialize(account.id)
    for step in ('personal', 'experience', 'payment', 'conduct'):
        STEPS[step](account.id)
    for doc in ('governmentId', 'certificationProof'):
        paravet_service.upload_document(account.id, doc, 'https://x.example/d.png')
    return paravet_service.submit_application(account.id)


# ---------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------
def test_admin_lists_under_review(admin_client, paravet, make_account):
    submitted_profile(paravet)
    paravet_service.initialize(make_account(Account.ROLE_PARAVET).id)
    r = admin_client.get('/api/paravet/admin/unverified')
    assert r.status_code == 200
    assert r.data['count'] == 1
    assert r.data['data'][0]['user']['email'] == paravet.email


def test_admin_routes_reject_non_admins(pv_client, paravet):
    profile = submitted_profile(paravet)
    assert pv_client.get('/api/paravet/admin/unverified').status_code == 403
    r = pv_client.patch(f'/api/paravet/admin/verify/{profile.id}', {'approved': True}, format='json')
    assert r.status_code == 403
    assert APIClient().get('/api/paravet/admin/unverified').status_code == 401


def test_approve_promotes_account(admin_client, paravet):
    profile = submitted_profile(paravet)
    r = admin_client.patch(f'/api/paravet/admin/verify/{profile.id}',
                           {'approved': True, 'adminId': 'admin1'}, format='json')
    assert r.status_code == 200
    assert r.data['message'] == 'Paravet approved'
    status = r.data['data']['applicationStatus']
    assert status['approvalStatus'] == 'approved'
    assert status['approvedByAdmin'] == 'admin1'
    assert status['approvedAt'] is not None
    paravet.refresh_from_db()
    assert paravet.role == Account.ROLE_VERIFIED_PARAVET
    assert AuditEvent.objects.filter(action='approve_paravet', object_id=str(profile.id)).exists()


def test_reject_keeps_role_and_allows_resubmission(admin_client, paravet):
    profile = submitted_profile(paravet)
    r = admin_client.patch(f'/api/paravet/admin/verify/{profile.id}',
                           {'approved': False, 'rejectionReason': 'Blurry ID'}, format='json')
    assert r.status_code == 200
    assert r.data['data']['applicationStatus']['rejectionReason'] == 'Blurry ID'
    paravet.refresh_from_db()
    assert paravet.role == Account.ROLE_PARAVET

    profile = paravet_service.submit_application(paravet.id)
    assert profile.approval_status == Paravet.STATUS_UNDER_REVIEW
    assert profile.rejection_reason == ''


def test_submit_and_reject_clear_approval_stamp(admin_client, paravet):
    stub = paravet_service.create_registration_stub(paravet)
    assert stub.approved_at is not None
    profile = submitted_profile(paravet)
    assert profile.approved_at is None

    admin_client.patch(f'/api/paravet/admin/verify/{profile.id}', {'approved': True}, format='json')
    paravet_service.submit_application(paravet.id)
    r = admin_client.patch(f'/api/paravet/admin/verify/{profile.id}',
                           {'approved': False, 'rejectionReason': 'Expired certificate'}, format='json')
    status = r.data['data']['applicationStatus']
    assert status['approvalStatus'] == 'rejected'
    assert status['approvedAt'] is None
    assert status['approvedByAdmin'] is None


def test_verify_field_sets_flag_and_aggregate(admin_client, paravet):
    profile = submitted_profile(paravet)
    r = admin_client.patch(f'/api/paravet/admin/verify-field/{profile.id}/personalInfo.fullName')
    assert r.status_code == 200
    assert r.data['data']['personalInfo']['fullName']['verified'] is True
    assert r.data['data']['fullyVerified'] is False

    for path in ('personalInfo.mobileNumber', 'documents.governmentId', 'documents.certificationProof',
                 'experience.yearsOfExperience', 'paymentInfo.accountHolderName',
                 'compliance.agreedToCodeOfConduct'):
        assert admin_client.patch(f'/api/paravet/admin/verify-field/{profile.id}/{path}').status_code == 200
    r = admin_client.get(f'/api/paravet/profile/{paravet.id}')
    assert r.data['data']['fullyVerified'] is True
    # approval stays an explicit decision
    assert r.data['data']['applicationStatus']['approvalStatus'] == 'under_review'


def test_verify_field_unknown_path(admin_client, paravet):
    profile = submitted_profile(paravet)
    r = admin_client.patch(f'/api/paravet/admin/verify-field/{profile.id}/documents.passport')
    assert r.status_code == 404
    r = admin_client.patch(f'/api/paravet/admin/verify-field/{profile.id}/nonsense')
    assert r.status_code == 404
    r = admin_client.patch('/api/paravet/admin/verify-field/999999/personalInfo.fullName')
    assert r.status_code == 404
