"""Management command to load a garage workspace from a YAML seed file."""

from pathlib import Path
from typing import Any, Dict, List

import yaml
from django.conf import settings
from django.contrib.auth.models import User
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.accounts.models import AuditLog, WorkspaceMembership
from apps.channels.models import WhatsAppAccount
from apps.workspaces.config import DEFAULT_PLAN, DEFAULT_PLAN_STATUS, is_valid_timezone, resolve_timezone_name
from apps.workspaces.models import Service, Workspace


class Command(BaseCommand):
    help = "Import a workspace, its services, owner account and WhatsApp number."

    def add_arguments(self, parser):
        parser.add_argument(
            "--file",
            default=str(settings.BASE_DIR / "seeds" / "workspace_seed.yaml"),
            help="Path to the workspace seed YAML file.",
        )

    def handle(self, *args, **options):
        seed_path = Path(options["file"])
        if not seed_path.exists():
            raise CommandError(f"Workspace seed file not found: {seed_path}")

        payload = self._load_yaml(seed_path)
        workspace_payload = payload.get("workspace")
        if not isinstance(workspace_payload, dict) or not workspace_payload.get("slug"):
            raise CommandError("Seed file must define workspace.slug")

        with transaction.atomic():
            workspace = self._seed_workspace(workspace_payload)
            self._seed_services(workspace, payload.get("services") or [])
            if payload.get("owner"):
                self._seed_owner(workspace, payload["owner"])
            if payload.get("whatsapp"):
                self._seed_whatsapp(workspace, payload["whatsapp"])

        self.stdout.write(self.style.SUCCESS(f"Workspace '{workspace.slug}' seeded."))

    # --------------------------------------------------------------------- utils
    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise CommandError(f"Seed file must contain a mapping: {path}")
        return data

    def _seed_workspace(self, payload: Dict[str, Any]) -> Workspace:
        timezone_name = resolve_timezone_name(payload.get("timezone"))
        if not is_valid_timezone(timezone_name):
            raise CommandError(f"Unknown time zone: {timezone_name}")
        workspace, _ = Workspace.objects.update_or_create(
            slug=payload["slug"],
            defaults={
                "name": payload.get("name", payload["slug"]),
                "timezone": timezone_name,
                "plan": payload.get("plan", DEFAULT_PLAN),
                "plan_status": payload.get("plan_status", DEFAULT_PLAN_STATUS),
                "brand_tone": payload.get("brand_tone"),
                "opening_hours": payload.get("opening_hours") or {},
            },
        )
        return workspace

    def _seed_services(self, workspace: Workspace, services: List[Dict[str, Any]]) -> None:
        for service in services:
            Service.objects.update_or_create(
                workspace=workspace,
                name=service["name"],
                defaults={"description": service.get("description")},
            )

    def _seed_owner(self, workspace: Workspace, owner: Dict[str, Any]) -> None:
        email = str(owner["email"]).strip().lower()
        user, created = User.objects.get_or_create(
            email=email,
            defaults={"username": email},
        )
        password = owner.get("password")
        if password and (created or not user.check_password(password)):
            user.set_password(password)
            user.save()

        WorkspaceMembership.objects.update_or_create(
            user=user,
            defaults={"workspace": workspace, "is_owner": True},
        )
        AuditLog.objects.get_or_create(
            actor_user=user,
            action="seed.owner.created",
            workspace=workspace,
            defaults={"meta": {"email": email}},
        )

    def _seed_whatsapp(self, workspace: Workspace, payload: Dict[str, Any]) -> None:
        account, _ = WhatsAppAccount.objects.get_or_create(
            phone_number_id=str(payload["phone_number_id"]),
            defaults={"workspace": workspace},
        )
        account.workspace = workspace
        account.display_phone_number = payload.get("display_phone_number", "")
        if payload.get("access_token"):
            account.access_token = payload["access_token"]
        account.save()
