"""
Veterinarian, clinic and pet resort onboarding plus the administrator
verification endpoints for them.

Listing endpoints accept filters either as query parameters (GET) or in
the request body (POST), since the mobile and admin clients use both.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from api.exceptions import AuthorizationError
from api.permissions import IsAdminRole, is_owner_or_admin
from api.serializers.professionals import (
    ClinicListQuerySerializer,
    ClinicRegisterSerializer,
    PetResortListQuerySerializer,
    PetResortRegisterSerializer,
    UserIdSerializer,
    VeterinarianListQuerySerializer,
    VeterinarianRegisterSerializer,
)
from api.services import professionals
from api.services import verification


def _filters(request, serializer_class):
    raw = request.query_params if request.method == 'GET' else request.data
    s = serializer_class(data=raw)
    s.is_valid(raise_exception=True)
    return s.validated_data


def _user_id(request, data) -> int:
    s = UserIdSerializer(data=data)
    s.is_valid(raise_exception=True)
    user_id = s.validated_data['userId']
    if not is_owner_or_admin(request.user, user_id):
        raise AuthorizationError('Not authorized to act for this user')
    return user_id


# ---------------------------------------------------------------------
# Veterinarians
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def veterinarian_register(request):
    s = VeterinarianRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    fields = dict(s.validated_data)
    user_id = _user_id(request, {'userId': fields.pop('userId')})
    vet = professionals.register_veterinarian(user_id, fields)
    return Response(
        {
            'success': True,
            'message': 'Veterinarian registered successfully. Waiting for verification.',
            'data': {'veterinarian': verification.veterinarian_to_dict(vet)},
        },
        status=status.HTTP_201_CREATED,
    )


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def check_veterinarian_verification(request):
    user_id = _user_id(request, request.data)
    vet = professionals.check_veterinarian_verification(user_id)
    return Response({
        'success': True,
        'message': 'Veterinarian is verified',
        'data': {'veterinarian': verification.veterinarian_summary(vet, extended=True)},
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def veterinarian_profile_screen(request):
    user_id = _user_id(request, request.data)
    return Response({'success': True, 'data': professionals.profile_screen(user_id)})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def verified_veterinarians(request):
    f = _filters(request, VeterinarianListQuerySerializer)
    vets = verification.list_veterinarians(verified=True, **f)
    return Response({'success': True, 'results': len(vets), 'data': {'veterinarians': vets}})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def unverified_veterinarians(request):
    f = _filters(request, VeterinarianListQuerySerializer)
    vets = verification.list_veterinarians(verified=False, **f)
    return Response({'success': True, 'results': len(vets), 'data': {'veterinarians': vets}})


@api_view(['PATCH', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def verify_veterinarian_field(request, vet_id: int, field_name: str):
    vet = verification.verify_veterinarian_field(vet_id, field_name, admin=request.user)
    return Response({
        'success': True,
        'message': f'{field_name} verified successfully',
        'data': {'veterinarian': verification.veterinarian_to_dict(vet)},
    })


# ---------------------------------------------------------------------
# Clinics
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def register_clinic(request):
    s = ClinicRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    fields = dict(s.validated_data)
    user_id = _user_id(request, {'userId': fields.pop('userId')})
    clinic = professionals.register_clinic(user_id, fields)
    return Response(
        {
            'success': True,
            'message': 'Clinic registered successfully. Waiting for verification.',
            'data': {'clinic': verification.clinic_to_dict(clinic)},
        },
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def unverified_clinics(request):
    f = _filters(request, ClinicListQuerySerializer)
    clinics = verification.list_clinics(
        verified=False, city=f.get('city'), establishment_type=f.get('establishmentType'), locality=f.get('locality'),
    )
    return Response({'success': True, 'results': len(clinics), 'data': {'clinics': clinics}})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def verified_clinics(request):
    f = _filters(request, ClinicListQuerySerializer)
    clinics = verification.list_clinics(
        verified=True, city=f.get('city'), establishment_type=f.get('establishmentType'), locality=f.get('locality'),
    )
    return Response({'success': True, 'results': len(clinics), 'data': {'clinics': clinics}})


@api_view(['POST', 'PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def verify_clinic(request, clinic_id: int):
    clinic = verification.verify_clinic(clinic_id, admin=request.user)
    return Response({
        'success': True,
        'message': 'Clinic verified successfully',
        'data': {'clinic': verification.clinic_to_dict(clinic)},
    })


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def all_clinics_with_vets(request):
    clinics = professionals.all_clinics_with_vets()
    return Response({'success': True, 'results': len(clinics), 'data': clinics})


# ---------------------------------------------------------------------
# Pet resorts
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def register_pet_resort(request):
    s = PetResortRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    fields = dict(s.validated_data)
    user_id = _user_id(request, {'userId': fields.pop('userId')})
    resort = professionals.register_pet_resort(user_id, fields)
    return Response(
        {
            'success': True,
            'message': 'Pet resort created successfully',
            'data': {'petResort': professionals.pet_resort_summary(resort)},
        },
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def verified_pet_resorts(request):
    f = _filters(request, PetResortListQuerySerializer)
    resorts = verification.list_pet_resorts(verified=True, city=f.get('city'), services=f.get('services'))
    return Response({'success': True, 'results': len(resorts), 'data': {'petResorts': resorts}})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def unverified_pet_resorts(request):
    f = _filters(request, PetResortListQuerySerializer)
    resorts = verification.list_pet_resorts(verified=False, city=f.get('city'), services=f.get('services'))
    return Response({'success': True, 'results': len(resorts), 'data': {'petResorts': resorts}})


@api_view(['POST', 'PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def verify_pet_resort(request, resort_id: int):
    resort = verification.set_pet_resort_verified(resort_id, True, admin=request.user)
    return Response({
        'success': True,
        'message': 'Pet resort verified successfully',
        'data': {'petResort': verification.pet_resort_to_dict(resort)},
    })


@api_view(['POST', 'PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def unverify_pet_resort(request, resort_id: int):
    resort = verification.set_pet_resort_verified(resort_id, False, admin=request.user)
    return Response({
        'success': True,
        'message': 'Pet resort unverified successfully',
        'data': {'petResort': verification.pet_resort_to_dict(resort)},
    })
