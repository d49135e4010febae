from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Contact",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=120)),
                ("email", models.EmailField(max_length=200)),
                ("phone", models.CharField(blank=True, default="", max_length=40)),
                ("company", models.CharField(blank=True, default="", max_length=160)),
                (
                    "reason",
                    models.CharField(
                        choices=[
                            ("support", "Support"),
                            ("partnership", "Partnership"),
                            ("hiring", "Hiring"),
                            ("feedback", "Feedback"),
                            ("other", "Other"),
                        ],
                        db_index=True,
                        default="other",
                        max_length=20,
                    ),
                ),
                ("subject", models.CharField(blank=True, default="", max_length=200)),
                ("message", models.TextField(max_length=2000)),
                ("newsletter", models.BooleanField(default=False)),
                ("consent", models.BooleanField(default=False)),
                (
                    "status",
                    models.CharField(
                        choices=[("new", "New"), ("read", "Read"), ("archived", "Archived")],
                        db_index=True,
                        default="new",
                        max_length=10,
                    ),
                ),
                ("meta", models.JSONField(blank=True, default=dict)),
            ],
            options={"db_table": "contact", "ordering": ("-created_at",)},
        ),
    ]
