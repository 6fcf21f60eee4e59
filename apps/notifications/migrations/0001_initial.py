from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("appointments", "0001_initial"),
        ("leads", "0001_initial"),
        ("workspaces", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("type", models.CharField(choices=[("WHATSAPP_SEND_FAILED", "WhatsApp send failed"), ("REMINDER_OUT_OF_WINDOW", "Reminder outside session window"), ("SYSTEM", "System")], max_length=32)),
                ("message", models.TextField()),
                ("status", models.CharField(choices=[("NEW", "New"), ("READ", "Read")], default="NEW", max_length=8)),
                ("appointment", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to="appointments.appointment")),
                ("lead", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="notifications", to="leads.lead")),
                ("workspace", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to="workspaces.workspace")),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("appointment__isnull", False)),
                        fields=("appointment", "type"),
                        name="unique_notification_per_appointment_type",
                    ),
                ],
            },
        ),
    ]
