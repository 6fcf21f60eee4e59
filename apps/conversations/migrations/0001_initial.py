from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("leads", "0001_initial"),
        ("workspaces", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Conversation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("channel", models.CharField(choices=[("WHATSAPP", "WhatsApp"), ("INTERNAL", "Internal chat")], default="WHATSAPP", max_length=16)),
                ("external_id", models.CharField(max_length=255)),
                ("language", models.CharField(blank=True, choices=[("en", "English"), ("fr", "French"), ("ar", "Arabic")], max_length=2, null=True)),
                ("last_flow", models.CharField(blank=True, max_length=32, null=True)),
                ("last_inbound_at", models.DateTimeField(blank=True, null=True)),
                ("lead", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="conversations", to="leads.lead")),
                ("workspace", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="conversations", to="workspaces.workspace")),
            ],
            options={
                "ordering": ["-updated_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("workspace", "channel", "external_id"),
                        name="unique_conversation_per_channel_sender",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("direction", models.CharField(choices=[("INBOUND", "Inbound"), ("OUTBOUND", "Outbound")], db_index=True, max_length=10)),
                ("text", models.TextField(blank=True, null=True)),
                ("external_message_id", models.CharField(blank=True, max_length=255, null=True)),
                ("raw_payload", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("conversation", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="messages", to="conversations.conversation")),
            ],
            options={
                "ordering": ["created_at", "id"],
            },
        ),
    ]
