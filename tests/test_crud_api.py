import json
from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from apps.appointments.models import Appointment, AppointmentStatus
from apps.leads.models import Lead, LeadSource, LeadStatus
from apps.notifications.models import Notification, NotificationStatus, NotificationType
from apps.workspaces.models import Service, Workspace

pytestmark = pytest.mark.django_db


def _post(client, url, payload, method="post"):
    return getattr(client, method)(url, data=json.dumps(payload), content_type="application/json")


def test_create_and_list_leads(client, workspace):
    response = _post(
        client,
        "/api/leads",
        {"first_name": "Sara", "phone": "+971 50 123 4567", "desired_service": "PPF"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["phone"] == "971501234567"
    assert data["status"] == LeadStatus.NEW
    assert data["source"] == LeadSource.MANUAL

    Lead.objects.create(workspace=workspace, first_name="Older")
    listing = client.get("/api/leads").json()["data"]["items"]
    assert [item["first_name"] for item in listing] == ["Older", "Sara"]


def test_duplicate_lead_phone_conflicts(client, workspace):
    Lead.objects.create(workspace=workspace, phone="971501234567")

    response = _post(client, "/api/leads", {"phone": "00971501234567"})

    assert response.status_code == 409
    assert response.json() == {"ok": False, "error": "LEAD_PHONE_EXISTS"}


def test_lead_validation_errors_have_details(client, workspace):
    response = _post(client, "/api/leads", {"source": "FAX", "consent_whatsapp": "maybe"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "INVALID_PAYLOAD"
    assert set(body["details"]) == {"source", "consent_whatsapp"}


def test_manual_lead_always_starts_new(client, workspace):
    response = _post(client, "/api/leads", {"first_name": "Nadia", "status": "WON"})

    assert response.status_code == 201
    assert response.json()["data"]["status"] == LeadStatus.NEW
    assert Lead.objects.get().status == LeadStatus.NEW


def test_leads_are_scoped_to_the_requested_workspace(client, workspace):
    other = Workspace.objects.create(name="Other", slug="other")
    Lead.objects.create(workspace=other, first_name="Elsewhere")
    Lead.objects.create(workspace=workspace, first_name="Here")

    default_items = client.get("/api/leads").json()["data"]["items"]
    other_items = client.get("/api/leads", {"workspace": "other"}).json()["data"]["items"]

    assert [item["first_name"] for item in default_items] == ["Here"]
    assert [item["first_name"] for item in other_items] == ["Elsewhere"]


def test_unknown_workspace_slug_is_404(client, workspace):
    response = client.get("/api/leads", {"workspace": "missing"})
    assert response.status_code == 404
    assert response.json() == {"ok": False, "error": "WORKSPACE_NOT_FOUND"}


def test_create_appointment_computes_duration(client, workspace):
    lead = Lead.objects.create(workspace=workspace, first_name="Omar")
    starts = datetime(2025, 10, 21, 6, 0, tzinfo=dt_timezone.utc)

    response = _post(
        client,
        "/api/appointments",
        {
            "lead_id": lead.id,
            "starts_at": starts.isoformat(),
            "ends_at": (starts + timedelta(minutes=90)).isoformat(),
        },
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == AppointmentStatus.CONFIRMED
    assert data["duration_minutes"] == 90
    assert data["lead"]["id"] == lead.id

    listing = client.get("/api/appointments").json()["data"]["items"]
    assert listing[0]["id"] == data["id"]
    assert listing[0]["lead"]["first_name"] == "Omar"


@pytest.mark.parametrize(
    "starts_at,ends_at",
    [
        ("not-a-date", "2025-10-21T07:00:00Z"),
        ("2025-10-21T07:00:00Z", "2025-10-21T06:00:00Z"),
        ("2025-10-21T07:00:00Z", "2025-10-21T07:00:00Z"),
    ],
)
def test_appointment_rejects_invalid_ranges(client, workspace, starts_at, ends_at):
    lead = Lead.objects.create(workspace=workspace)
    response = _post(
        client,
        "/api/appointments",
        {"lead_id": lead.id, "starts_at": starts_at, "ends_at": ends_at},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_PAYLOAD"
    assert not Appointment.objects.exists()


def test_appointment_requires_lead_of_same_workspace(client, workspace):
    other = Workspace.objects.create(name="Other", slug="other")
    foreign_lead = Lead.objects.create(workspace=other)

    response = _post(
        client,
        "/api/appointments",
        {"lead_id": foreign_lead.id, "starts_at": "2025-10-21T06:00:00Z", "ends_at": "2025-10-21T06:30:00Z"},
    )
    assert response.status_code == 404


def test_notifications_create_list_and_mark_read(client, workspace):
    created = _post(client, "/api/notifications", {"type": "SYSTEM", "message": "Welcome aboard"})
    assert created.status_code == 201
    notification_id = created.json()["data"]["id"]
    Notification.objects.create(workspace=workspace, type=NotificationType.SYSTEM, message="Second")

    patched = _post(client, "/api/notifications", {"id": notification_id}, method="patch")
    assert patched.status_code == 200
    assert patched.json()["data"]["status"] == NotificationStatus.READ

    unread = client.get("/api/notifications", {"status": "NEW"}).json()["data"]["items"]
    read = client.get("/api/notifications", {"status": "READ"}).json()["data"]["items"]
    everything = client.get("/api/notifications").json()["data"]["items"]
    assert [item["message"] for item in unread] == ["Second"]
    assert [item["message"] for item in read] == ["Welcome aboard"]
    assert len(everything) == 2


def test_notification_type_must_be_known(client, workspace):
    response = _post(client, "/api/notifications", {"type": "PROMO", "message": "x"})
    assert response.status_code == 400
    assert "type" in response.json()["details"]


def test_mark_read_is_one_way(workspace):
    notification = Notification.objects.create(workspace=workspace, type=NotificationType.SYSTEM, message="m")

    assert notification.mark_read() is True
    assert notification.mark_read() is False
    notification.refresh_from_db()
    assert notification.status == NotificationStatus.READ


def test_patch_unknown_notification(client, workspace):
    response = _post(client, "/api/notifications", {"id": 424242}, method="patch")
    assert response.status_code == 404


@pytest.mark.parametrize("payload", [[1], {"id": "abc"}, {}])
def test_patch_notification_requires_numeric_id(client, workspace, payload):
    response = _post(client, "/api/notifications", payload, method="patch")

    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_PAYLOAD"


def test_services_list_oldest_first(client, workspace):
    _post(client, "/api/services", {"name": "Interior detailing"})
    _post(client, "/api/services", {"name": "PPF", "description": "Front kit"})

    items = client.get("/api/services").json()["data"]["items"]
    assert [item["name"] for item in items] == ["Interior detailing", "PPF"]
    assert Service.objects.get(name="PPF").description == "Front kit"


def test_service_name_is_required(client, workspace):
    response = _post(client, "/api/services", {"description": "nameless"})
    assert response.status_code == 400
    assert "name" in response.json()["details"]


def test_workspace_settings_roundtrip(client, workspace):
    response = _post(
        client,
        "/api/workspace",
        {
            "name": "Rivo Paris",
            "timezone": "Europe/Paris",
            "brand_tone": "Warm",
            "opening_hours": {"mon": "09:00-18:00", "sun": ""},
        },
        method="put",
    )

    assert response.status_code == 200
    workspace.refresh_from_db()
    assert workspace.name == "Rivo Paris"
    assert workspace.timezone == "Europe/Paris"
    assert workspace.opening_hours == {"mon": "09:00-18:00", "sun": ""}
    assert client.get("/api/workspace").json()["data"]["timezone"] == "Europe/Paris"


def test_workspace_rejects_unknown_timezone(client, workspace):
    response = _post(
        client,
        "/api/workspace",
        {"name": "Rivo", "timezone": "Moon/Base"},
        method="put",
    )

    assert response.status_code == 400
    assert "timezone" in response.json()["details"]
    workspace.refresh_from_db()
    assert workspace.timezone == "Asia/Dubai"
