import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("registrations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("amount_in_paise", models.PositiveIntegerField()),
                ("currency", models.CharField(default="INR", max_length=3)),
                ("razorpay_order_id", models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ("razorpay_payment_id", models.CharField(blank=True, max_length=64, null=True)),
                ("razorpay_signature", models.CharField(blank=True, max_length=128, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("created", "Created"), ("paid", "Paid"), ("failed", "Failed"), ("refunded", "Refunded")],
                        db_index=True,
                        default="created",
                        max_length=10,
                    ),
                ),
                (
                    "enrollment",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="registrations.enrollment",
                    ),
                ),
            ],
            options={"db_table": "payment", "ordering": ("-created_at",)},
        ),
        migrations.AddConstraint(
            model_name="payment",
            constraint=models.UniqueConstraint(
                condition=models.Q(("status", "created")),
                fields=("enrollment",),
                name="uniq_created_payment_per_enrollment",
            ),
        ),
    ]
