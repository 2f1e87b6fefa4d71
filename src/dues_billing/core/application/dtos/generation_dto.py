from pydantic import BaseModel, Field


class MemberErrorDTO(BaseModel):
    member_id: str
    message: str


class GenerationResultDTO(BaseModel):
    """Resumen de la generación masiva de un período."""
    year: int
    month: int
    created: int = 0
    updated: int = 0
    skipped: int = 0
    not_enrolled: int = 0
    errors: list[MemberErrorDTO] = Field(default_factory=list)


class FailedMonthDTO(BaseModel):
    month: int
    message: str


class YearGenerationResultDTO(BaseModel):
    year: int
    months: list[GenerationResultDTO] = Field(default_factory=list)
    failed_months: list[FailedMonthDTO] = Field(default_factory=list)

    @property
    def created(self) -> int:
        return sum(m.created for m in self.months)

    @property
    def updated(self) -> int:
        return sum(m.updated for m in self.months)

    @property
    def skipped(self) -> int:
        return sum(m.skipped for m in self.months)


class ExtensionResultDTO(BaseModel):
    member_id: str
    created: int = 0
    skipped: int = 0
    periods_created: list[tuple[int, int]] = Field(default_factory=list)


class BackfillResultDTO(BaseModel):
    members_processed: int = 0
    created: int = 0
    skipped: int = 0
    errors: list[MemberErrorDTO] = Field(default_factory=list)
