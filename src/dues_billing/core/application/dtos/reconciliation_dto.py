from pydantic import BaseModel, Field


class RowError(BaseModel):
    row: int
    message: str


class ReconciliationReport(BaseModel):
    """
    Resultado de una conciliación. `row` es el número de fila (desde 1)
    en el orden de entrada.
    """
    total_rows: int = 0
    successful_rows: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    scheduled: int = 0
    errors: list[RowError] = Field(default_factory=list)
