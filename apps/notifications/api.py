"""Notification inbox APIs."""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers, status

from apps.common.api import error_response, ok_response
from apps.notifications.models import Notification, NotificationStatus, NotificationType
from apps.workspaces.api import WorkspaceScopedAPIView


class NotificationCreateSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=NotificationType.choices)
    message = serializers.CharField()
    lead_id = serializers.IntegerField(required=False, allow_null=True)


class NotificationReadSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)


def serialize_notification(notification: Notification) -> Dict[str, Any]:
    return {
        "id": notification.id,
        "type": notification.type,
        "message": notification.message,
        "status": notification.status,
        "lead_id": notification.lead_id,
        "created_at": notification.created_at.isoformat(),
    }


class NotificationListView(WorkspaceScopedAPIView):
    def get(self, request):
        workspace = self.get_workspace(request)
        notifications = workspace.notifications.order_by("-created_at", "-id")
        status_filter = request.query_params.get("status")
        if status_filter in NotificationStatus.values:
            notifications = notifications.filter(status=status_filter)
        return ok_response({"items": [serialize_notification(item) for item in notifications]})

    def post(self, request):
        workspace = self.get_workspace(request)
        serializer = NotificationCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("INVALID_PAYLOAD", details=serializer.errors)

        data = serializer.validated_data
        lead = None
        if data.get("lead_id") is not None:
            lead = workspace.leads.filter(id=data["lead_id"]).first()
            if lead is None:
                return error_response("LEAD_NOT_FOUND", status_code=status.HTTP_404_NOT_FOUND)

        notification = Notification.objects.create(
            workspace=workspace,
            lead=lead,
            type=data["type"],
            message=data["message"],
        )
        return ok_response(serialize_notification(notification), status_code=status.HTTP_201_CREATED)

    def patch(self, request):
        workspace = self.get_workspace(request)
        serializer = NotificationReadSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("INVALID_PAYLOAD", details=serializer.errors)

        notification = workspace.notifications.filter(id=serializer.validated_data["id"]).first()
        if notification is None:
            return error_response("NOTIFICATION_NOT_FOUND", status_code=status.HTTP_404_NOT_FOUND)
        notification.mark_read()
        return ok_response(serialize_notification(notification))
