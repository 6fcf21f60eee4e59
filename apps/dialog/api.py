"""Internal chat simulator API."""

from __future__ import annotations

from rest_framework import serializers, status

from apps.common.api import error_response, ok_response
from apps.conversations.models import Message
from apps.dialog.orchestrator import DialogOrchestrator
from apps.workspaces.api import WorkspaceScopedAPIView

orchestrator = DialogOrchestrator()


class ChatMessageSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=2000)


def serialize_message(message: Message):
    return {
        "id": message.id,
        "direction": message.direction,
        "text": message.text,
        "created_at": message.created_at.isoformat(),
    }


class InternalChatView(WorkspaceScopedAPIView):
    def get(self, request):
        workspace = self.get_workspace(request)
        conversation = orchestrator.internal_conversation(workspace)
        messages = conversation.messages.order_by("created_at", "id") if conversation else []
        return ok_response({"items": [serialize_message(message) for message in messages]})

    def post(self, request):
        workspace = self.get_workspace(request)
        serializer = ChatMessageSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("INVALID_PAYLOAD", details=serializer.errors)

        outcome = orchestrator.handle_internal(workspace, serializer.validated_data["message"])
        data = {
            "reply": outcome.reply,
            "language": outcome.result.language.value,
            "flow": outcome.result.flow.value,
            "messages": [serialize_message(outcome.inbound), serialize_message(outcome.outbound)],
        }
        return ok_response(data, status_code=status.HTTP_201_CREATED)
