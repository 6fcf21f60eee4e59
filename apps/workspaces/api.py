"""Workspace settings and service catalogue APIs."""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import permissions, status
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView

from apps.common.api import error_response, ok_response
from apps.workspaces.models import Service, Workspace
from apps.workspaces.serializers import ServiceCreateSerializer, WorkspaceUpdateSerializer
from apps.workspaces.services import resolve_workspace


def serialize_workspace(workspace: Workspace) -> Dict[str, Any]:
    return {
        "id": workspace.id,
        "slug": workspace.slug,
        "name": workspace.name,
        "timezone": workspace.timezone,
        "plan": workspace.plan,
        "plan_status": workspace.plan_status,
        "brand_tone": workspace.brand_tone,
        "opening_hours": workspace.opening_hours,
    }


def serialize_service(service: Service) -> Dict[str, Any]:
    return {
        "id": service.id,
        "name": service.name,
        "description": service.description,
        "created_at": service.created_at.isoformat(),
    }


class WorkspaceScopedAPIView(APIView):
    """Base view resolving the workspace a request operates on.

    An explicit ``workspace`` slug (query string or body) wins, then the
    membership of an authenticated user, then ``DEFAULT_WORKSPACE_SLUG``.
    """

    permission_classes = [permissions.AllowAny]

    def get_workspace(self, request) -> Workspace:
        identifier = request.query_params.get("workspace")
        if not identifier and isinstance(request.data, dict):
            identifier = request.data.get("workspace")
        if not identifier:
            membership = getattr(getattr(request, "user", None), "membership", None)
            if membership is not None:
                return membership.workspace
        workspace = resolve_workspace(identifier)
        if workspace is None:
            raise NotFound("WORKSPACE_NOT_FOUND")
        return workspace


class WorkspaceSettingsView(WorkspaceScopedAPIView):
    def get(self, request):
        return ok_response(serialize_workspace(self.get_workspace(request)))

    def put(self, request):
        workspace = self.get_workspace(request)
        serializer = WorkspaceUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("INVALID_PAYLOAD", details=serializer.errors)

        data = serializer.validated_data
        workspace.name = data["name"]
        workspace.timezone = data["timezone"]
        workspace.brand_tone = data.get("brand_tone") or None
        update_fields = ["name", "timezone", "brand_tone", "updated_at"]
        if "opening_hours" in data:
            workspace.opening_hours = data["opening_hours"]
            update_fields.append("opening_hours")
        workspace.save(update_fields=update_fields)
        return ok_response(serialize_workspace(workspace))


class ServiceListView(WorkspaceScopedAPIView):
    def get(self, request):
        workspace = self.get_workspace(request)
        services = workspace.services.order_by("created_at", "id")
        return ok_response({"items": [serialize_service(service) for service in services]})

    def post(self, request):
        workspace = self.get_workspace(request)
        serializer = ServiceCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("INVALID_PAYLOAD", details=serializer.errors)

        service = Service.objects.create(
            workspace=workspace,
            name=serializer.validated_data["name"],
            description=serializer.validated_data.get("description") or None,
        )
        return ok_response(serialize_service(service), status_code=status.HTTP_201_CREATED)
