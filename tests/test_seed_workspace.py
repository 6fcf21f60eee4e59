import pytest
from django.contrib.auth.models import User
from django.core.management import CommandError, call_command

from apps.accounts.models import AuditLog, WorkspaceMembership
from apps.channels.models import WhatsAppAccount
from apps.common.security import is_sealed
from apps.workspaces.models import Service, Workspace

pytestmark = pytest.mark.django_db

SEED = """
workspace:
  slug: seeded-garage
  name: Seeded Garage
  timezone: Europe/Paris
  opening_hours:
    mon: "09:00-18:00"
services:
  - name: PPF full front
    description: Bonnet, bumper and wings.
  - name: Brake inspection
owner:
  email: Owner@Seeded.example
  password: seeded-pass
whatsapp:
  phone_number_id: "555000111"
  display_phone_number: "+33 6 00 00 00 00"
  access_token: seeded-token
"""


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seed.yaml"
    path.write_text(SEED, encoding="utf-8")
    return path


def test_seed_workspace_creates_everything(seed_file):
    call_command("seed_workspace", file=str(seed_file))

    workspace = Workspace.objects.get(slug="seeded-garage")
    assert workspace.timezone == "Europe/Paris"
    assert workspace.opening_hours == {"mon": "09:00-18:00"}
    assert set(Service.objects.filter(workspace=workspace).values_list("name", flat=True)) == {
        "PPF full front",
        "Brake inspection",
    }

    owner = User.objects.get(email="owner@seeded.example")
    assert owner.check_password("seeded-pass")
    assert WorkspaceMembership.objects.get(user=owner).workspace == workspace
    assert AuditLog.objects.filter(action="seed.owner.created", workspace=workspace).exists()

    account = WhatsAppAccount.objects.get(phone_number_id="555000111")
    assert account.workspace == workspace
    assert is_sealed(account.access_token)
    assert account.get_access_token() == "seeded-token"


def test_seed_workspace_is_idempotent(seed_file):
    call_command("seed_workspace", file=str(seed_file))
    call_command("seed_workspace", file=str(seed_file))

    assert Workspace.objects.filter(slug="seeded-garage").count() == 1
    assert Service.objects.count() == 2
    assert User.objects.count() == 1
    assert WhatsAppAccount.objects.count() == 1


def test_seed_workspace_missing_file(tmp_path):
    with pytest.raises(CommandError):
        call_command("seed_workspace", file=str(tmp_path / "missing.yaml"))


def test_seed_workspace_rejects_unknown_timezone(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("workspace:\n  slug: bad\n  timezone: Mars/Olympus\n", encoding="utf-8")

    with pytest.raises(CommandError):
        call_command("seed_workspace", file=str(path))
    assert not Workspace.objects.exists()


def test_bundled_seed_file_loads():
    call_command("seed_workspace")
    assert Workspace.objects.filter(slug="rivo-demo").exists()
