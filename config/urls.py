from django.urls import path

from apps.accounts.api import LoginView, MeView, RegisterView
from apps.appointments.api import AppointmentListView
from apps.channels.views import whatsapp_webhook
from apps.dashboard import views as dashboard
from apps.dialog.api import InternalChatView
from apps.leads.api import LeadListView
from apps.notifications.api import NotificationListView
from apps.workspaces.api import ServiceListView, WorkspaceSettingsView

urlpatterns = [
    path("api/whatsapp/webhook", whatsapp_webhook, name="whatsapp-webhook"),
    path("api/auth/register", RegisterView.as_view(), name="auth-register"),
    path("api/auth/login", LoginView.as_view(), name="auth-login"),
    path("api/auth/me", MeView.as_view(), name="auth-me"),
    path("api/leads", LeadListView.as_view(), name="api-leads"),
    path("api/appointments", AppointmentListView.as_view(), name="api-appointments"),
    path("api/notifications", NotificationListView.as_view(), name="api-notifications"),
    path("api/services", ServiceListView.as_view(), name="api-services"),
    path("api/workspace", WorkspaceSettingsView.as_view(), name="api-workspace"),
    path("api/internal-chat", InternalChatView.as_view(), name="api-internal-chat"),
    path("", dashboard.home, name="dashboard-home"),
    path("leads/", dashboard.leads, name="dashboard-leads"),
    path("appointments/", dashboard.appointments, name="dashboard-appointments"),
    path("services/", dashboard.services, name="dashboard-services"),
    path("settings/", dashboard.workspace_settings, name="dashboard-settings"),
    path("notifications/", dashboard.notifications, name="dashboard-notifications"),
    path("internal-chat/", dashboard.internal_chat, name="dashboard-internal-chat"),
]
