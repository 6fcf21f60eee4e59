"""Appointment APIs."""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers, status

from apps.appointments.models import Appointment, AppointmentStatus
from apps.common.api import error_response, ok_response
from apps.leads.api import serialize_lead
from apps.workspaces.api import WorkspaceScopedAPIView


class AppointmentCreateSerializer(serializers.Serializer):
    lead_id = serializers.IntegerField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        if attrs["ends_at"] <= attrs["starts_at"]:
            raise serializers.ValidationError({"ends_at": ["Must be after starts_at."]})
        return attrs


def serialize_appointment(appointment: Appointment) -> Dict[str, Any]:
    return {
        "id": appointment.id,
        "status": appointment.status,
        "starts_at": appointment.starts_at.isoformat(),
        "ends_at": appointment.ends_at.isoformat(),
        "duration_minutes": appointment.duration_minutes,
        "notes": appointment.notes,
        "lead": serialize_lead(appointment.lead),
    }


class AppointmentListView(WorkspaceScopedAPIView):
    def get(self, request):
        workspace = self.get_workspace(request)
        appointments = workspace.appointments.select_related("lead").order_by("-created_at", "-id")
        return ok_response({"items": [serialize_appointment(appt) for appt in appointments]})

    def post(self, request):
        workspace = self.get_workspace(request)
        serializer = AppointmentCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("INVALID_PAYLOAD", details=serializer.errors)

        data = serializer.validated_data
        lead = workspace.leads.filter(id=data["lead_id"]).first()
        if lead is None:
            return error_response("LEAD_NOT_FOUND", status_code=status.HTTP_404_NOT_FOUND)

        duration = data["ends_at"] - data["starts_at"]
        appointment = Appointment.objects.create(
            workspace=workspace,
            lead=lead,
            status=AppointmentStatus.CONFIRMED,
            starts_at=data["starts_at"],
            ends_at=data["ends_at"],
            duration_minutes=round(duration.total_seconds() / 60),
            notes=data.get("notes") or None,
        )
        return ok_response(serialize_appointment(appointment), status_code=status.HTTP_201_CREATED)
