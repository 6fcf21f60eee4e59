"""Authentication API views."""

from __future__ import annotations

from typing import Any, Dict

from django.contrib.auth.models import User
from django.db import transaction
from rest_framework import permissions, serializers, status
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import AuditLog, WorkspaceMembership
from apps.common.api import error_response, ok_response
from apps.workspaces.config import DEFAULT_PLAN, DEFAULT_PLAN_STATUS, default_timezone
from apps.workspaces.models import Workspace
from apps.workspaces.services import unique_workspace_slug


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, trim_whitespace=False)
    workspace_name = serializers.CharField(min_length=2, max_length=255)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=1, trim_whitespace=False)


def _serialize_user(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
    }


def _serialize_workspace(user: User) -> Dict[str, Any] | None:
    membership = (
        WorkspaceMembership.objects.select_related("workspace").filter(user=user).first()
    )
    if membership is None:
        return None
    workspace = membership.workspace
    return {
        "id": workspace.id,
        "slug": workspace.slug,
        "name": workspace.name,
        "timezone": workspace.timezone,
        "is_owner": membership.is_owner,
    }


def _token_payload(user: User) -> Dict[str, Any]:
    refresh = RefreshToken.for_user(user)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
        "user": _serialize_user(user),
        "workspace": _serialize_workspace(user),
    }


class RegisterView(APIView):
    """Create a trial workspace and its owner account."""

    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("INVALID_PAYLOAD", details=serializer.errors)

        email = serializer.validated_data["email"].strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            return error_response("EMAIL_ALREADY_REGISTERED", status_code=status.HTTP_400_BAD_REQUEST)

        workspace_name = serializer.validated_data["workspace_name"].strip()
        with transaction.atomic():
            workspace = Workspace.objects.create(
                name=workspace_name,
                slug=unique_workspace_slug(workspace_name),
                timezone=default_timezone(),
                plan=DEFAULT_PLAN,
                plan_status=DEFAULT_PLAN_STATUS,
            )
            user = User.objects.create_user(
                username=email,
                email=email,
                password=serializer.validated_data["password"],
            )
            WorkspaceMembership.objects.create(user=user, workspace=workspace, is_owner=True)
            AuditLog.objects.create(
                actor_user=user,
                action="REGISTER",
                workspace=workspace,
                meta={"user_id": user.id},
            )

        return ok_response(_token_payload(user), status_code=status.HTTP_201_CREATED)


class LoginView(APIView):
    """Handle email/password login using JWT tokens."""

    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("INVALID_PAYLOAD", details=serializer.errors)

        email = serializer.validated_data["email"].strip().lower()
        password = serializer.validated_data["password"]
        user = User.objects.filter(email__iexact=email).first()
        if not user or not user.check_password(password) or not user.is_active:
            AuditLog.objects.create(
                actor_user=user if user else None,
                action="LOGIN_FAILURE",
                meta={"user_id": user.id} if user else {},
            )
            return error_response("INVALID_CREDENTIALS", status_code=status.HTTP_401_UNAUTHORIZED)

        membership = getattr(user, "membership", None)
        AuditLog.objects.create(
            actor_user=user,
            action="LOGIN_SUCCESS",
            workspace=membership.workspace if membership else None,
            meta={"user_id": user.id},
        )
        return ok_response(_token_payload(user))


class MeView(APIView):
    """Return the authenticated user and their workspace."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        user: User = request.user
        return ok_response(
            {
                "user": _serialize_user(user),
                "workspace": _serialize_workspace(user),
            }
        )
