from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from dues_billing.core.application.cqrs import CommandDTO


@dataclass(frozen=True)
class ReconcilePaymentsCommand(CommandDTO):
    """Filas ya tokenizadas: columna (minúscula) → valor crudo."""
    rows: Sequence[Mapping[str, str]]
