"""
Formato de las planillas de pagos importadas.

Columnas reconocidas (nombres ya en minúscula):
- identificador del socio: la primera presente de `id_columns`
- períodos: ``<mes>_<año>``, mes en español o inglés, sin importar tildes
- próximo pago: la primera presente de `next_payment_columns`
"""
from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable, Mapping
from datetime import date

from dues_billing.core.domain.services.calendar import Period

_MONTHS: dict[str, int] = {
    # español
    "enero": 1, "febrero": 2, "marzo": 3, "abril": 4, "mayo": 5, "junio": 6,
    "julio": 7, "agosto": 8, "septiembre": 9, "setiembre": 9, "octubre": 10,
    "noviembre": 11, "diciembre": 12,
    # inglés
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11,
    "december": 12,
}

_PERIOD_COLUMN_RX = re.compile(r"^([a-z]+)[_\s-](\d{4})$")
_ISO_DATE_RX = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _norm(txt: str) -> str:
    return unicodedata.normalize("NFKD", txt).encode("ascii", "ignore").decode().lower().strip()


def _split(value: str | Iterable[str]) -> tuple[str, ...]:
    items = value.split(",") if isinstance(value, str) else value
    return tuple(_norm(i) for i in items if i and i.strip())


def parse_iso_date(raw: str) -> date:
    """Fecha ``YYYY-MM-DD``; cualquier otra forma es ValueError."""
    value = (raw or "").strip()
    if not _ISO_DATE_RX.match(value):
        raise ValueError(f"fecha no reconocida: {raw!r}")
    return date.fromisoformat(value)


class ImportLayout:
    def __init__(
        self,
        id_columns: str | Iterable[str] = "rut,fiscal_id,fiscalid",
        next_payment_columns: str | Iterable[str] = "proximo_pago,next_payment",
        paid_tokens: str | Iterable[str] = "yes",
    ) -> None:
        self.id_columns = _split(id_columns)
        self.next_payment_columns = _split(next_payment_columns)
        self.paid_tokens = frozenset(_split(paid_tokens))

    # ------------------------------------------------ filas
    def normalize_row(self, row: Mapping) -> dict[str, str]:
        """Llaves sin tildes y en minúscula; valores como texto recortado."""
        return {
            _norm(str(k)): ("" if v is None else str(v).strip())
            for k, v in row.items()
        }

    def _first(self, row: Mapping[str, str], columns: tuple[str, ...]) -> str | None:
        for col in columns:
            value = row.get(col)
            if value:
                return value
        return None

    def fiscal_id(self, row: Mapping[str, str]) -> str | None:
        return self._first(row, self.id_columns)

    def next_payment(self, row: Mapping[str, str]) -> str | None:
        return self._first(row, self.next_payment_columns)

    # ------------------------------------------------ columnas de período
    def period_for_column(self, column: str) -> Period | None:
        match = _PERIOD_COLUMN_RX.match(_norm(column))
        if not match:
            return None
        month = _MONTHS.get(match.group(1))
        if month is None:
            return None
        return int(match.group(2)), month

    def period_cells(self, row: Mapping[str, str]) -> list[tuple[str, Period, str]]:
        """Celdas de período no vacías, ordenadas cronológicamente."""
        cells = []
        for column, value in row.items():
            period = self.period_for_column(column)
            if period is not None and value:
                cells.append((column, period, value))
        return sorted(cells, key=lambda c: c[1])

    def parse_cell(self, value: str, period: Period) -> date:
        """
        Fecha de pago de una celda: un token de pagado equivale al primer
        día del período; si no, se espera una fecha ISO.
        """
        if _norm(value) in self.paid_tokens:
            return date(period[0], period[1], 1)
        return parse_iso_date(value)
