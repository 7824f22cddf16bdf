"""
Pet parent profile views.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.exceptions import AuthorizationError
from api.permissions import is_owner_or_admin
from api.serializers.auth import ParentSerializer, ParentUpdateSerializer
from api.services import parents as parent_service

logger = logging.getLogger(__name__)


def _ensure_owner(user, owner_id):
    if not is_owner_or_admin(user, owner_id):
        raise AuthorizationError('Not authorized to access this parent profile')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def parent_register(request):
    s = ParentSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    user_id = vd.get('userId') or request.user.id
    _ensure_owner(request.user, user_id)
    parent, created = parent_service.register_parent(
        name=vd['name'],
        email=vd['email'],
        phone=vd.get('phone'),
        address=vd.get('address'),
        gender=vd.get('gender'),
        image=vd.get('image'),
        user_id=user_id,
    )
    return Response(
        {
            'success': True,
            'message': 'Parent registered successfully' if created else 'Parent profile updated successfully',
            'parent': parent_service.parent_to_dict(parent),
        },
        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
    )


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def parent_detail(request, pk: int):
    # GET and PATCH address the profile by owning account, DELETE by profile id
    if request.method == 'DELETE':
        parent = parent_service.find_parent(pk)
        _ensure_owner(request.user, parent.user_id)
        parent.delete()
        logger.info('parent profile %s deleted by account %s', pk, request.user.id)
        return Response({'success': True, 'message': 'Parent deleted successfully', 'data': None})

    _ensure_owner(request.user, pk)
    if request.method == 'GET':
        parent = parent_service.get_parent(pk)
        return Response({'success': True, 'parent': parent_service.parent_to_dict(parent)})

    s = ParentUpdateSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    parent, created = parent_service.update_parent(pk, s.validated_data)
    message = 'Parent profile created successfully' if created else 'Parent profile updated successfully'
    return Response({'success': True, 'message': message, 'parent': parent_service.parent_to_dict(parent)})
