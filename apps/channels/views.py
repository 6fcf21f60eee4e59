"""HTTP endpoints for messaging channels."""

from __future__ import annotations

import json
import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.channels.payloads import parse_whatsapp_incoming
from apps.channels.services import (
    resolve_inbound_workspace,
    resolve_whatsapp_account,
    verify_signature,
)
from apps.common.utils import minimal_ok
from apps.dialog.orchestrator import DialogOrchestrator

logger = logging.getLogger(__name__)

orchestrator = DialogOrchestrator()

SUBSCRIBE_MODE = "subscribe"


def _query_param(request: HttpRequest, name: str) -> str | None:
    return request.GET.get(f"hub.{name}") or request.GET.get(name)


def _verify_subscription(request: HttpRequest) -> HttpResponse:
    mode = _query_param(request, "mode")
    verify_token = _query_param(request, "verify_token")
    challenge = _query_param(request, "challenge")

    if mode == SUBSCRIBE_MODE and verify_token and challenge:
        expected = getattr(settings, "WHATSAPP_VERIFY_TOKEN", "")
        if expected and verify_token == expected:
            return HttpResponse(challenge, content_type="text/plain", status=200)
        logger.warning("whatsapp.webhook.verify_rejected")
        return JsonResponse({"ok": False, "error": "Invalid verify token."}, status=403)

    return minimal_ok(
        message="WhatsApp webhook endpoint (GET) is alive, but parameters are missing."
    )


def _receive_delivery(request: HttpRequest) -> JsonResponse:
    if not verify_signature(request.body, request.headers.get("X-Hub-Signature-256")):
        logger.warning("whatsapp.webhook.bad_signature")
        return JsonResponse({"ok": False, "error": "Invalid signature."}, status=401)

    try:
        payload = json.loads(request.body.decode("utf-8") or "null")
    except (UnicodeDecodeError, json.JSONDecodeError):
        payload = None

    parsed = parse_whatsapp_incoming(payload)
    if parsed is None:
        logger.info("whatsapp.webhook.ignored")
        return minimal_ok(status="ignored")

    try:
        account = resolve_whatsapp_account(parsed.phone_number_id)
        workspace = resolve_inbound_workspace(account)
        orchestrator.handle_whatsapp(workspace, parsed, payload, account=account)
    except Exception:
        # The provider disables webhooks that keep failing, so errors are acknowledged.
        logger.exception(
            "whatsapp.webhook.error",
            extra={"wa_message_id": parsed.wa_message_id},
        )
        return JsonResponse(
            {"ok": False, "status": "error", "detail": "Server error while processing webhook."},
            status=200,
        )

    return minimal_ok(status="processed")


@csrf_exempt
@require_http_methods(["GET", "POST"])
def whatsapp_webhook(request: HttpRequest) -> HttpResponse:
    if request.method == "GET":
        return _verify_subscription(request)
    return _receive_delivery(request)
