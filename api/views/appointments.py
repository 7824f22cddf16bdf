"""
Clinic appointments booked by pet parents.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.serializers.bookings import AppointmentCreateSerializer, AppointmentStatusSerializer
from api.services import bookings


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def book_appointment(request):
    s = AppointmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appt = bookings.create_appointment(request.user, **s.validated_data)
    return Response(
        {'success': True, 'message': 'Appointment booked successfully', 'data': bookings.appointment_to_dict(appt)},
        status=status.HTTP_201_CREATED,
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_appointments(request):
    data = [bookings.appointment_to_dict(a) for a in bookings.list_appointments(request.user)]
    return Response({'success': True, 'count': len(data), 'data': data})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def appointment_status(request, pk: int):
    s = AppointmentStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appt = bookings.update_appointment_status(request.user, pk, s.validated_data['status'])
    return Response({'success': True, 'message': 'Appointment status updated',
                     'data': bookings.appointment_to_dict(appt)})


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def cancel_appointment(request, pk: int):
    appt = bookings.cancel_appointment(request.user, pk)
    return Response({'success': True, 'message': 'Appointment cancelled successfully',
                     'data': bookings.appointment_to_dict(appt)})
