import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class WorkspacesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.workspaces"

    def ready(self) -> None:
        if not getattr(settings, "DEFAULT_WORKSPACE_SLUG", ""):
            logger.warning(
                "workspaces.default_missing",
                extra={"setting": "DEFAULT_WORKSPACE_SLUG"},
            )
