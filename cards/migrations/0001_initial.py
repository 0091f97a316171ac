import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Card",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("key", models.CharField(max_length=64, unique=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("unused", "Unused"), ("used", "Used"), ("expired", "Expired")],
                        db_index=True,
                        default="unused",
                        max_length=10,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                (
                    "hwid",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Bound device fingerprint",
                        max_length=32,
                        null=True,
                    ),
                ),
                ("used_at", models.DateTimeField(blank=True, null=True)),
                ("bind_at", models.DateTimeField(blank=True, null=True)),
                ("expired_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("batch_id", models.CharField(db_index=True, max_length=36)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "cards",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["status", "expired_at"], name="cards_status_expired_idx"
                    )
                ],
            },
        ),
    ]
