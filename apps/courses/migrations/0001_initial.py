from django.db import migrations, models


def catalog_fields():
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
        ("slug", models.SlugField(max_length=220, unique=True)),
        ("desc", models.TextField(blank=True, default="")),
        ("duration", models.CharField(blank=True, default="", max_length=60)),
        ("level", models.CharField(blank=True, db_index=True, default="", max_length=60)),
        ("perks", models.JSONField(blank=True, default=list)),
        ("syllabus", models.JSONField(blank=True, default=list)),
        ("rating", models.FloatField(default=0)),
        ("students", models.PositiveIntegerField(default=0)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Course",
            fields=catalog_fields()
            + [
                ("title", models.CharField(max_length=200)),
                ("cover", models.TextField(blank=True, default="")),
                ("category", models.CharField(blank=True, db_index=True, default="", max_length=100)),
                ("sub_category", models.CharField(blank=True, db_index=True, default="", max_length=100)),
            ],
            options={"db_table": "course", "ordering": ("-created_at",)},
        ),
        migrations.CreateModel(
            name="SkillPath",
            fields=catalog_fields()
            + [
                ("name", models.CharField(max_length=200)),
                ("img", models.TextField(blank=True, default="")),
                ("skills", models.JSONField(blank=True, default=list)),
            ],
            options={"db_table": "skill_path", "ordering": ("-created_at",)},
        ),
        migrations.CreateModel(
            name="CareerPath",
            fields=catalog_fields()
            + [
                ("name", models.CharField(max_length=200)),
                ("img", models.TextField(blank=True, default="")),
                ("skills", models.JSONField(blank=True, default=list)),
            ],
            options={"db_table": "career_path", "ordering": ("-created_at",)},
        ),
    ]
