"""Server-rendered admin pages for garage staff."""

from __future__ import annotations

from datetime import timedelta
from urllib.parse import urlencode

from django.contrib import messages
from django.db import IntegrityError, transaction
from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_http_methods

from apps.dashboard.forms import ChatMessageForm, LeadForm, ServiceForm, WorkspaceSettingsForm
from apps.dialog.orchestrator import DialogOrchestrator
from apps.leads.models import Lead, LeadSource
from apps.notifications.models import NotificationStatus
from apps.workspaces.models import Service, Workspace
from apps.workspaces.services import resolve_workspace

orchestrator = DialogOrchestrator()


def _workspace(request: HttpRequest) -> Workspace:
    workspace = resolve_workspace(request.GET.get("workspace"))
    if workspace is None:
        raise Http404("Workspace not found")
    return workspace


def _redirect_back(request: HttpRequest, name: str):
    response = redirect(name)
    if request.GET.get("workspace"):
        response["Location"] += "?" + urlencode({"workspace": request.GET["workspace"]})
    return response


def home(request: HttpRequest) -> HttpResponse:
    workspace = _workspace(request)
    now = timezone.now()
    context = {
        "workspace": workspace,
        "lead_count": workspace.leads.count(),
        "new_lead_count": workspace.leads.filter(status="NEW").count(),
        "upcoming_appointments": workspace.appointments.confirmed()
        .starting_between(now, now + timedelta(days=7))
        .select_related("lead")
        .order_by("starts_at"),
        "unread_notifications": workspace.notifications.filter(status=NotificationStatus.NEW).count(),
    }
    return render(request, "dashboard/home.html", context)


@require_http_methods(["GET", "POST"])
def leads(request: HttpRequest) -> HttpResponse:
    workspace = _workspace(request)
    form = LeadForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        data = {key: value or None for key, value in form.cleaned_data.items()}
        data["consent_whatsapp"] = form.cleaned_data["consent_whatsapp"]
        try:
            with transaction.atomic():
                Lead.objects.create(workspace=workspace, source=LeadSource.MANUAL, **data)
        except IntegrityError:
            form.add_error("phone", "A lead with this phone number already exists.")
        else:
            messages.success(request, "Lead created.")
            return _redirect_back(request, "dashboard-leads")
    context = {
        "workspace": workspace,
        "leads": workspace.leads.order_by("-created_at", "-id"),
        "form": form,
    }
    return render(request, "dashboard/leads.html", context)


def appointments(request: HttpRequest) -> HttpResponse:
    workspace = _workspace(request)
    context = {
        "workspace": workspace,
        "appointments": workspace.appointments.select_related("lead").order_by("-starts_at"),
    }
    return render(request, "dashboard/appointments.html", context)


@require_http_methods(["GET", "POST"])
def services(request: HttpRequest) -> HttpResponse:
    workspace = _workspace(request)
    form = ServiceForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        Service.objects.create(
            workspace=workspace,
            name=form.cleaned_data["name"],
            description=form.cleaned_data["description"] or None,
        )
        messages.success(request, "Service added.")
        return _redirect_back(request, "dashboard-services")
    context = {
        "workspace": workspace,
        "services": workspace.services.order_by("created_at", "id"),
        "form": form,
    }
    return render(request, "dashboard/services.html", context)


@require_http_methods(["GET", "POST"])
def workspace_settings(request: HttpRequest) -> HttpResponse:
    workspace = _workspace(request)
    initial = {
        "name": workspace.name,
        "timezone": workspace.timezone,
        "brand_tone": workspace.brand_tone or "",
    }
    form = WorkspaceSettingsForm(request.POST or None, initial=initial)
    if request.method == "POST" and form.is_valid():
        workspace.name = form.cleaned_data["name"]
        workspace.timezone = form.cleaned_data["timezone"]
        workspace.brand_tone = form.cleaned_data["brand_tone"] or None
        workspace.save(update_fields=["name", "timezone", "brand_tone", "updated_at"])
        messages.success(request, "Settings saved.")
        return _redirect_back(request, "dashboard-settings")
    return render(request, "dashboard/settings.html", {"workspace": workspace, "form": form})


@require_http_methods(["GET", "POST"])
def notifications(request: HttpRequest) -> HttpResponse:
    workspace = _workspace(request)
    if request.method == "POST":
        notification_id = request.POST.get("id", "")
        notification = (
            workspace.notifications.filter(id=notification_id).first() if notification_id.isdigit() else None
        )
        if notification is None:
            raise Http404("Notification not found")
        notification.mark_read()
        return _redirect_back(request, "dashboard-notifications")

    status_filter = request.GET.get("status")
    items = workspace.notifications.select_related("lead").order_by("-created_at", "-id")
    if status_filter in NotificationStatus.values:
        items = items.filter(status=status_filter)
    context = {
        "workspace": workspace,
        "notifications": items,
        "status_filter": status_filter,
        "statuses": NotificationStatus.values,
    }
    return render(request, "dashboard/notifications.html", context)


@require_http_methods(["GET", "POST"])
def internal_chat(request: HttpRequest) -> HttpResponse:
    workspace = _workspace(request)
    form = ChatMessageForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        orchestrator.handle_internal(workspace, form.cleaned_data["message"])
        return _redirect_back(request, "dashboard-internal-chat")
    conversation = orchestrator.internal_conversation(workspace)
    history = conversation.messages.order_by("created_at", "id") if conversation else []
    context = {"workspace": workspace, "form": form, "history": history}
    return render(request, "dashboard/internal_chat.html", context)
