"""
Pet registration and maintenance for pet parents.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.exceptions import AuthorizationError
from api.permissions import is_owner_or_admin
from api.serializers.pets import PetCreateSerializer, PetSerializer
from api.services import pets as pet_service

logger = logging.getLogger(__name__)


def _ensure_owner(user, user_id):
    if not is_owner_or_admin(user, user_id):
        raise AuthorizationError("Not authorized to access this user's pets")


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def pet_register(request):
    s = PetCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    fields = dict(s.validated_data)
    user_id = fields.pop('userId')
    _ensure_owner(request.user, user_id)
    owner = pet_service.owner_or_404(user_id)
    pet = pet_service.create_pet(owner, fields)
    logger.info('pet %s registered for account %s', pet.id, owner.id)
    return Response(
        {'success': True, 'message': 'Pet registered successfully', 'pet': PetSerializer(pet).data},
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def pets_by_user(request, user_id: int):
    _ensure_owner(request.user, user_id)
    pets = pet_service.list_pets(user_id)
    data = PetSerializer(pets, many=True).data
    return Response({'success': True, 'count': len(data), 'pets': data})


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def user_pet_detail(request, user_id: int, pet_id: int):
    _ensure_owner(request.user, user_id)
    pet = pet_service.get_owned_pet(user_id, pet_id)
    if request.method == 'DELETE':
        pet.delete()
        logger.info('pet %s deleted for account %s', pet_id, user_id)
        return Response({'success': True, 'message': 'Pet deleted successfully', 'data': None})

    s = PetSerializer(pet, data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    pet = pet_service.update_pet(pet, s.validated_data)
    return Response({'success': True, 'message': 'Pet updated successfully', 'pet': PetSerializer(pet).data})
