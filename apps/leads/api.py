"""Lead (mini CRM) APIs."""

from __future__ import annotations

from typing import Any, Dict

from django.db import IntegrityError, transaction
from rest_framework import status

from apps.common.api import error_response, ok_response
from apps.leads.models import Lead
from apps.leads.serializers import LeadCreateSerializer
from apps.workspaces.api import WorkspaceScopedAPIView


def serialize_lead(lead: Lead) -> Dict[str, Any]:
    return {
        "id": lead.id,
        "first_name": lead.first_name,
        "last_name": lead.last_name,
        "phone": lead.phone,
        "city": lead.city,
        "consent_whatsapp": lead.consent_whatsapp,
        "desired_service": lead.desired_service,
        "problem_summary": lead.problem_summary,
        "source": lead.source,
        "status": lead.status,
        "created_at": lead.created_at.isoformat(),
    }


class LeadListView(WorkspaceScopedAPIView):
    def get(self, request):
        workspace = self.get_workspace(request)
        leads = workspace.leads.order_by("-created_at", "-id")
        return ok_response({"items": [serialize_lead(lead) for lead in leads]})

    def post(self, request):
        workspace = self.get_workspace(request)
        serializer = LeadCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("INVALID_PAYLOAD", details=serializer.errors)

        try:
            with transaction.atomic():
                lead = Lead.objects.create(workspace=workspace, **serializer.validated_data)
        except IntegrityError:
            return error_response("LEAD_PHONE_EXISTS", status_code=status.HTTP_409_CONFLICT)
        return ok_response(serialize_lead(lead), status_code=status.HTTP_201_CREATED)
