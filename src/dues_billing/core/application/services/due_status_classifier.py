from datetime import date

from dues_billing.core.domain.entities.due_entity import DueEntity, DueStatus
from dues_billing.core.domain.services.calendar import due_date_for


def classify(due: DueEntity, today: date) -> DueStatus:
    """
    Estado derivado de una cuota; nunca se almacena.

    PAID si está pagada; OVERDUE si impaga y `today` es posterior al día 5
    del período; PENDING en otro caso (el mismo día 5 aún no vence).
    """
    if due.paid:
        return DueStatus.PAID
    if today > due_date_for(due.year, due.month):
        return DueStatus.OVERDUE
    return DueStatus.PENDING


def is_overdue(due: DueEntity, today: date) -> bool:
    return classify(due, today) is DueStatus.OVERDUE
