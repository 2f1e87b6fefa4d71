from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from dues_billing.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class GenerationRunEntity(EntityMixin):
    id: uuid.UUID
    year: int
    month: int
    default_amount: Decimal
    created: int
    updated: int
    skipped: int
    overwrite: bool
    generated_at: datetime | None = None
