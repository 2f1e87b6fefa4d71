import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Member",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("fiscal_id", models.CharField(max_length=16, unique=True)),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(blank=True, default="", max_length=100)),
                ("email", models.EmailField(blank=True, max_length=128, null=True)),
                ("monthly_due_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ("enrollment_date", models.DateField()),
                ("active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "members",
                "ordering": ["last_name", "first_name"],
            },
        ),
        migrations.CreateModel(
            name="Due",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "year",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1000),
                            django.core.validators.MaxValueValidator(9999),
                        ]
                    ),
                ),
                (
                    "month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("paid", models.BooleanField(db_index=True, default=False)),
                ("paid_at", models.DateField(blank=True, null=True)),
                (
                    "payment_method",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("transfer", "Transferencia"),
                            ("cash", "Efectivo"),
                            ("card", "Tarjeta"),
                            ("bulk-import", "Importación masiva"),
                        ],
                        max_length=20,
                        null=True,
                    ),
                ),
                ("receipt_url", models.URLField(blank=True, max_length=500, null=True)),
                ("notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="dues",
                        to="django_interface.member",
                    ),
                ),
            ],
            options={
                "db_table": "dues",
                "ordering": ["-year", "-month"],
                "indexes": [
                    models.Index(fields=["year", "month"], name="due_period_idx"),
                    models.Index(
                        condition=models.Q(("paid", False)),
                        fields=["paid", "year", "month"],
                        name="due_unpaid_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("member", "year", "month"), name="uq_due_member_period"),
                    models.CheckConstraint(
                        condition=models.Q(("month__gte", 1), ("month__lte", 12)),
                        name="ck_due_month_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("paid", True), ("paid_at__isnull", False), ("payment_method__isnull", False)),
                            models.Q(("paid", False), ("paid_at__isnull", True), ("payment_method__isnull", True)),
                            _connector="OR",
                        ),
                        name="ck_due_payment_coherence",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PaymentRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "payment_method",
                    models.CharField(
                        choices=[
                            ("transfer", "Transferencia"),
                            ("cash", "Efectivo"),
                            ("card", "Tarjeta"),
                            ("bulk-import", "Importación masiva"),
                        ],
                        max_length=20,
                    ),
                ),
                ("paid_at", models.DateField()),
                ("receipt_url", models.URLField(blank=True, max_length=500, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("confirmed", "Confirmado"), ("reverted", "Revertido")],
                        db_index=True,
                        default="confirmed",
                        max_length=10,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "due",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payment_records",
                        to="django_interface.due",
                    ),
                ),
                (
                    "member",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payment_records",
                        to="django_interface.member",
                    ),
                ),
            ],
            options={
                "db_table": "payment_records",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="DuesGenerationRun",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("year", models.PositiveSmallIntegerField()),
                ("month", models.PositiveSmallIntegerField()),
                ("default_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("created", models.PositiveIntegerField(default=0)),
                ("updated", models.PositiveIntegerField(default=0)),
                ("skipped", models.PositiveIntegerField(default=0)),
                ("overwrite", models.BooleanField(default=False)),
                ("generated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "dues_generation_runs",
                "constraints": [
                    models.UniqueConstraint(fields=("year", "month"), name="uq_generation_period"),
                ],
            },
        ),
    ]
