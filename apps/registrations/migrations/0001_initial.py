from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Enrollment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user_email", models.EmailField(db_index=True, max_length=254)),
                (
                    "course_type",
                    models.CharField(
                        choices=[("skillpath", "Skill path"), ("careerpath", "Career path"), ("courses", "Course")],
                        max_length=20,
                    ),
                ),
                ("course_slug", models.CharField(max_length=220)),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("paid", "Paid"), ("cancelled", "Cancelled")],
                        db_index=True,
                        default="pending",
                        max_length=10,
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("currency", models.CharField(default="INR", max_length=3)),
                ("meta", models.JSONField(blank=True, default=dict)),
            ],
            options={"db_table": "enrollment", "ordering": ("-created_at",)},
        ),
        migrations.AddConstraint(
            model_name="enrollment",
            constraint=models.UniqueConstraint(
                fields=("user_email", "course_type", "course_slug"), name="uniq_user_course"
            ),
        ),
    ]
