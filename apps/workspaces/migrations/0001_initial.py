import apps.workspaces.config
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Workspace",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("slug", models.SlugField(unique=True)),
                ("timezone", models.CharField(default=apps.workspaces.config.default_timezone, max_length=64)),
                ("plan", models.CharField(choices=[("TRIAL", "Trial"), ("STARTER", "Starter"), ("PRO", "Pro")], default="TRIAL", max_length=16)),
                ("plan_status", models.CharField(choices=[("ACTIVE", "Active"), ("PAST_DUE", "Past due"), ("CANCELLED", "Cancelled")], default="ACTIVE", max_length=16)),
                ("brand_tone", models.CharField(blank=True, max_length=255, null=True)),
                ("opening_hours", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("workspace", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="services", to="workspaces.workspace")),
            ],
            options={
                "ordering": ["created_at", "id"],
            },
        ),
    ]
