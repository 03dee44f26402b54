from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("key", models.CharField(max_length=64, unique=True)),
                ("owner_email", models.EmailField(blank=True, db_index=True, max_length=254, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("machine_id", models.CharField(blank=True, max_length=255, null=True)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("last_seen", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["owner_email", "status"], name="licenses_owner_status_idx"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Purchase",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("reference", models.CharField(max_length=255, unique=True)),
                ("email", models.CharField(db_index=True, max_length=254)),
                ("license_key", models.CharField(db_index=True, max_length=64)),
                ("customer_reference", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "subscription_reference",
                    models.CharField(blank=True, max_length=255, null=True),
                ),
                ("download_token", models.CharField(max_length=64, unique=True)),
                ("download_expires_at", models.DateTimeField()),
                ("created_at", models.DateTimeField()),
            ],
            options={
                "db_table": "purchases",
                "ordering": ["-created_at"],
            },
        ),
    ]
