"""Pydantic API schemas.

Field names on the wire are camelCase and must stay stable: report
formatters downstream read them directly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SelectedChargeIn(CamelModel):
    unique_id: int | None = None
    charge_id: str | None = None
    class_letter: str | None = Field(default=None, alias="class")
    offense: str | None = None
    addition: str | None = None
    category: str | None = None

    @field_validator("charge_id", "offense", "category", mode="before")
    @classmethod
    def numbers_to_str(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class ArrestCalculatorRequest(CamelModel):
    report: list[SelectedChargeIn]
    is_parole_violator: bool = False


class CodeEnhancementRequest(CamelModel):
    report: list[SelectedChargeIn]


class AdditionOut(BaseModel):
    name: str
    sentence_multiplier: float
    points_multiplier: float


class SentenceFiguresOut(CamelModel):
    min_time: float
    max_time: float
    points: float


class TotalFiguresOut(SentenceFiguresOut):
    impound: float
    suspension: float


class BailFlagsOut(CamelModel):
    eligible: bool
    discretionary: bool
    no_bail: bool
    has_bail_charge: bool


class ChargeResultOut(CamelModel):
    row: SelectedChargeIn
    charge_details: dict[str, Any]
    addition_details: AdditionOut | None = None
    parole_addition_details: AdditionOut | None = None
    applied_additions: list[AdditionOut]
    sentence_multiplier: float
    points_multiplier: float
    is_modified: bool
    original: SentenceFiguresOut
    modified: SentenceFiguresOut
    fine: float
    impound: float
    suspension: float
    bail_auto: bool | int | None
    bail_cost: float


class StipulationOut(BaseModel):
    title: str
    extra: str


class CalculationTotalsOut(CamelModel):
    original: TotalFiguresOut
    modified: TotalFiguresOut
    fine: float
    bail_status: BailFlagsOut
    highest_bail: float


class ArrestCalculationResponse(CamelModel):
    calculation_results: list[ChargeResultOut]
    extras: list[StipulationOut]
    totals: CalculationTotalsOut
    bail_status: str
    min_time_capped: float
    max_time_capped: float
    is_capped: bool
    impound_capped: float
    is_impound_capped: bool
    suspension_capped: float
    is_suspension_capped: bool
    is_streets_eligible: bool


class CodeEnhancementResponse(CamelModel):
    is_streets_eligible: bool


class AdditionsResponse(BaseModel):
    additions: list[AdditionOut]


class ErrorResponse(BaseModel):
    error: str
