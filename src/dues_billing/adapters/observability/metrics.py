from django.http import HttpResponse
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

registry = CollectorRegistry()

DUES_CREATED = Counter(
    "dues_created_total",
    "Cuotas creadas",
    ["source"],
    registry=registry,
)

DUES_PAYMENTS = Counter(
    "dues_payment_changes_total",
    "Marcas y desmarcas de pago",
    ["action", "method"],
    registry=registry,
)

RECONCILIATION_ROWS = Counter(
    "dues_reconciliation_rows_total",
    "Filas procesadas en la conciliación",
    ["result"],
    registry=registry,
)

RECONCILIATION_DURATION = Histogram(
    "dues_reconciliation_duration_seconds",
    "Duración de la conciliación completa",
    registry=registry,
)


def metrics(request):
    data = generate_latest(registry)
    return HttpResponse(data, content_type=CONTENT_TYPE_LATEST)
