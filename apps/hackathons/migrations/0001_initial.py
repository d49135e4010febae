from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Hackathon",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=200)),
                ("slug", models.SlugField(max_length=220, unique=True)),
                ("tagline", models.CharField(blank=True, default="", max_length=300)),
                ("cover", models.TextField(blank=True, default="")),
                ("desc", models.TextField(blank=True, default="")),
                ("start_at", models.DateTimeField(db_index=True)),
                ("end_at", models.DateTimeField(db_index=True)),
                (
                    "location_type",
                    models.CharField(
                        choices=[("online", "Online"), ("offline", "Offline"), ("hybrid", "Hybrid")],
                        default="online",
                        max_length=10,
                    ),
                ),
                ("location_name", models.CharField(blank=True, default="", max_length=200)),
                ("prize_pool", models.CharField(blank=True, default="", max_length=100)),
                ("registration_url", models.URLField(blank=True, default="", max_length=500)),
                ("organizers", models.JSONField(blank=True, default=list)),
                ("sponsors", models.JSONField(blank=True, default=list)),
                ("rules", models.JSONField(blank=True, default=list)),
                ("eligibility", models.JSONField(blank=True, default=list)),
                ("tracks", models.JSONField(blank=True, default=list)),
                ("judges", models.JSONField(blank=True, default=list)),
                ("mentors", models.JSONField(blank=True, default=list)),
                ("schedule", models.JSONField(blank=True, default=list)),
                ("published", models.BooleanField(default=True)),
            ],
            options={"db_table": "hackathon", "ordering": ("start_at",)},
        ),
    ]
