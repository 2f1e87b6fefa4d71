"""
Calendario de cuotas.

Toda cuota vence el día 5 de su mes. Los períodos se manejan como
tuplas ``(año, mes)`` para que la aritmética de meses no dependa de días.
"""
from __future__ import annotations

from collections.abc import Iterator
from datetime import date
from typing import Protocol

from django.utils import timezone

DUE_DAY = 5

Period = tuple[int, int]


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    """Fecha local según ``settings.TIME_ZONE``."""

    def today(self) -> date:
        return timezone.localdate()


class FixedClock:
    def __init__(self, day: date) -> None:
        self.day = day

    def today(self) -> date:
        return self.day


def due_date_for(year: int, month: int) -> date:
    return date(year, month, DUE_DAY)


def period_of(day: date) -> Period:
    return day.year, day.month


def shift_period(year: int, month: int, months: int) -> Period:
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def iter_periods(start: Period, count: int) -> Iterator[Period]:
    for offset in range(count):
        yield shift_period(start[0], start[1], offset)


def periods_between(start: Period, end: Period) -> list[Period]:
    """Períodos de ``start`` a ``end``, ambos inclusive. Vacío si start > end."""
    span = (end[0] * 12 + end[1]) - (start[0] * 12 + start[1]) + 1
    return list(iter_periods(start, span)) if span > 0 else []
