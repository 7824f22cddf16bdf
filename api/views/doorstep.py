"""
Doorstep service bookings (grooming, training, walking, sitting,
veterinary home visits).
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.serializers.bookings import DoorstepBookingCreateSerializer, DoorstepStatusSerializer
from api.services import bookings


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def bookings_collection(request):
    if request.method == 'GET':
        data = [bookings.booking_to_dict(b) for b in bookings.list_bookings(request.user)]
        return Response({'success': True, 'count': len(data), 'data': data})

    s = DoorstepBookingCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    booking = bookings.create_booking(request.user, **s.validated_data)
    return Response(
        {'success': True, 'message': 'Booking created successfully', 'data': bookings.booking_to_dict(booking)},
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def booking_detail(request, pk: int):
    booking = bookings.get_booking(request.user, pk)
    return Response({'success': True, 'data': bookings.booking_to_dict(booking, with_owner=True)})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def booking_status(request, pk: int):
    s = DoorstepStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    booking = bookings.update_booking_status(request.user, pk, s.validated_data['status'])
    return Response({'success': True, 'message': 'Booking status updated', 'data': bookings.booking_to_dict(booking)})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def cancel_booking(request, pk: int):
    booking = bookings.cancel_booking(request.user, pk)
    return Response({'success': True, 'message': 'Booking cancelled successfully',
                     'data': bookings.booking_to_dict(booking)})
