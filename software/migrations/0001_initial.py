import django.utils.timezone
from django.db import migrations, models

import software.infrastructure.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SoftwareVersion",
            fields=[
                (
                    "id",
                    models.PositiveSmallIntegerField(
                        default=1, editable=False, primary_key=True, serialize=False
                    ),
                ),
                (
                    "version",
                    models.CharField(
                        help_text="Semantic version, e.g. 1.0.0 or 1.2.3-beta.1",
                        max_length=64,
                        validators=[software.infrastructure.models.validate_semantic_version],
                    ),
                ),
                (
                    "app_status",
                    models.BooleanField(
                        default=True, help_text="Whether the application is enabled"
                    ),
                ),
                (
                    "description",
                    models.TextField(
                        blank=True, default="", help_text="Main changes in this version"
                    ),
                ),
                ("published_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "software version",
                "verbose_name_plural": "software version",
                "db_table": "software_version",
            },
        ),
    ]
