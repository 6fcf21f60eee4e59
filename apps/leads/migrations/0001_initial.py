from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("workspaces", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Lead",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("first_name", models.CharField(blank=True, max_length=150, null=True)),
                ("last_name", models.CharField(blank=True, max_length=150, null=True)),
                ("phone", models.CharField(blank=True, max_length=32, null=True)),
                ("city", models.CharField(blank=True, max_length=120, null=True)),
                ("consent_whatsapp", models.BooleanField(default=False)),
                ("desired_service", models.CharField(blank=True, max_length=255, null=True)),
                ("problem_summary", models.TextField(blank=True, null=True)),
                ("source", models.CharField(choices=[("WHATSAPP", "WhatsApp"), ("MANUAL", "Manual"), ("INTERNAL_CHAT", "Internal chat")], default="MANUAL", max_length=20)),
                ("status", models.CharField(choices=[("NEW", "New"), ("CONTACTED", "Contacted"), ("QUALIFIED", "Qualified"), ("BOOKED", "Booked"), ("LOST", "Lost")], default="NEW", max_length=16)),
                ("workspace", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="leads", to="workspaces.workspace")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("phone__isnull", False)),
                        fields=("workspace", "phone"),
                        name="unique_lead_phone_per_workspace",
                    ),
                ],
            },
        ),
    ]
