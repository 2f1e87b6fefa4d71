"""
Admin site registry
-------------------
Registra los modelos de socios, cuotas y pagos de forma dinámica.
"""

import structlog
from django.contrib import admin as django_admin

from . import models

logger = structlog.get_logger(__name__)

# ╭──────────────────────────────────────────────╮
# │ Configuración de cada ModelAdmin            │
# ╰──────────────────────────────────────────────╯
MODEL_ADMIN_REGISTRY: dict[type[models.models.Model], dict] = {
    # 1. Socios
    models.Member: dict(
        list_display=("fiscal_id", "first_name", "last_name", "monthly_due_amount", "enrollment_date", "active"),
        list_filter=("active",),
        search_fields=("fiscal_id", "first_name", "last_name", "email"),
    ),
    # 2. Cuotas
    models.Due: dict(
        list_display=("member", "year", "month", "amount", "paid", "paid_at", "payment_method"),
        list_filter=("paid", "year", "month", "payment_method"),
        search_fields=("member__fiscal_id", "member__last_name"),
        list_select_related=("member",),
    ),
    # 3. Libro de pagos (solo lectura en la práctica)
    models.PaymentRecord: dict(
        list_display=("due", "member", "amount", "payment_method", "paid_at", "status"),
        list_filter=("status", "payment_method"),
        search_fields=("member__fiscal_id",),
        readonly_fields=("created_at",),
    ),
    # 4. Generaciones masivas
    models.DuesGenerationRun: dict(
        list_display=("year", "month", "default_amount", "created", "updated", "skipped", "generated_at"),
        list_filter=("year",),
    ),
}

# ╭──────────────────────────────────────────────╮
# │ Registro dinámico                           │
# ╰──────────────────────────────────────────────╯
for model, opts in MODEL_ADMIN_REGISTRY.items():
    admin_class = type(f"{model.__name__}Admin", (django_admin.ModelAdmin,), opts)
    django_admin.site.register(model, admin_class)
    logger.debug("admin.model_registered", model=model.__name__)
