from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("workspaces", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="WhatsAppAccount",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("phone_number_id", models.CharField(max_length=64, unique=True)),
                ("display_phone_number", models.CharField(blank=True, max_length=32)),
                ("access_token", models.TextField(blank=True)),
                ("workspace", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="whatsapp_accounts", to="workspaces.workspace")),
            ],
            options={
                "ordering": ["workspace_id", "phone_number_id"],
            },
        ),
    ]
