"""
Dominio → ORM de socios y cuotas.

⚑ Unicidad de la cuota por (socio, año, mes)
⚑ Coherencia de pago (pagado ⇔ fecha y método) vía CHECK
⚑ RUT almacenado normalizado
"""

from __future__ import annotations

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Index, Q, UniqueConstraint

from dues_billing.core.utils.fiscal_id import normalize_fiscal_id


# ╭──────────────────────────────────────────────╮
# │ 1. Socios                                   │
# ╰──────────────────────────────────────────────╯
class Member(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    fiscal_id = models.CharField(max_length=16, unique=True)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100, blank=True, default="")
    email = models.EmailField(max_length=128, blank=True, null=True)
    # Vacío = usa DUES_DEFAULT_AMOUNT
    monthly_due_amount = models.DecimalField(
        max_digits=12, decimal_places=2, blank=True, null=True
    )
    enrollment_date = models.DateField()
    active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "members"
        ordering = ["last_name", "first_name"]

    def save(self, *args, **kwargs):
        self.fiscal_id = normalize_fiscal_id(self.fiscal_id)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return f"{name} ({self.fiscal_id})"


# ╭──────────────────────────────────────────────╮
# │ 2. Cuotas                                   │
# ╰──────────────────────────────────────────────╯
class Due(models.Model):
    class Method(models.TextChoices):
        TRANSFER = "transfer", "Transferencia"
        CASH = "cash", "Efectivo"
        CARD = "card", "Tarjeta"
        BULK_IMPORT = "bulk-import", "Importación masiva"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    member = models.ForeignKey(Member, on_delete=models.CASCADE, related_name="dues")
    year = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1000), MaxValueValidator(9999)]
    )
    month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    paid = models.BooleanField(default=False, db_index=True)
    paid_at = models.DateField(blank=True, null=True)
    payment_method = models.CharField(
        max_length=20, choices=Method.choices, blank=True, null=True
    )
    receipt_url = models.URLField(max_length=500, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "dues"
        ordering = ["-year", "-month"]
        constraints = [
            UniqueConstraint(fields=["member", "year", "month"], name="uq_due_member_period"),
            models.CheckConstraint(
                condition=Q(month__gte=1, month__lte=12),
                name="ck_due_month_range",
            ),
            models.CheckConstraint(
                condition=(
                    Q(paid=True, paid_at__isnull=False, payment_method__isnull=False)
                    | Q(paid=False, paid_at__isnull=True, payment_method__isnull=True)
                ),
                name="ck_due_payment_coherence",
            ),
        ]
        indexes = [
            Index(fields=["year", "month"], name="due_period_idx"),
            Index(fields=["paid", "year", "month"], name="due_unpaid_idx", condition=Q(paid=False)),
        ]

    def __str__(self) -> str:
        return f"Cuota {self.month:02d}/{self.year} | {self.member_id}"


# ╭──────────────────────────────────────────────╮
# │ 3. Libro de pagos                           │
# ╰──────────────────────────────────────────────╯
class PaymentRecord(models.Model):
    class Status(models.TextChoices):
        CONFIRMED = "confirmed", "Confirmado"
        REVERTED = "reverted", "Revertido"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    due = models.ForeignKey(Due, on_delete=models.CASCADE, related_name="payment_records")
    member = models.ForeignKey(Member, on_delete=models.CASCADE, related_name="payment_records")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_method = models.CharField(max_length=20, choices=Due.Method.choices)
    paid_at = models.DateField()
    receipt_url = models.URLField(max_length=500, blank=True, null=True)
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.CONFIRMED, db_index=True
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "payment_records"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Pago {self.amount} ({self.payment_method}) | {self.due_id}"


# ╭──────────────────────────────────────────────╮
# │ 4. Registro de generación masiva            │
# ╰──────────────────────────────────────────────╯
class DuesGenerationRun(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    year = models.PositiveSmallIntegerField()
    month = models.PositiveSmallIntegerField()
    default_amount = models.DecimalField(max_digits=12, decimal_places=2)
    created = models.PositiveIntegerField(default=0)
    updated = models.PositiveIntegerField(default=0)
    skipped = models.PositiveIntegerField(default=0)
    overwrite = models.BooleanField(default=False)
    generated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "dues_generation_runs"
        constraints = [
            UniqueConstraint(fields=["year", "month"], name="uq_generation_period"),
        ]

    def __str__(self) -> str:
        return f"Generación {self.month:02d}/{self.year}"
