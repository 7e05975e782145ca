"""Core types shared by calculator and API."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Literal, TypeVar, Union

ChargeType = Literal["F", "M", "I", "?"]

BailStatus = Literal["N/A", "NOT ELIGIBLE", "DISCRETIONARY", "ELIGIBLE"]

MINUTES_PER_DAY = 1440

T = TypeVar("T")


class BailMode(Enum):
    """Bail policy of a single charge."""

    AUTO = "auto"
    NONE = "none"
    DISCRETIONARY = "discretionary"

    @classmethod
    def from_raw(cls, value: object) -> BailMode | None:
        # bool before int: True == 1 in Python
        if value is True:
            return cls.AUTO
        if value is False:
            return cls.NONE
        if isinstance(value, (int, float)) and value == 2:
            return cls.DISCRETIONARY
        return None

    @property
    def wire_value(self) -> bool | int:
        if self is BailMode.AUTO:
            return True
        if self is BailMode.NONE:
            return False
        return 2


@dataclass(frozen=True, slots=True)
class Duration:
    days: float = 0
    hours: float = 0
    min: float = 0

    @property
    def minutes(self) -> float:
        return self.days * MINUTES_PER_DAY + self.hours * 60 + self.min


ZERO_DURATION = Duration()


@dataclass(frozen=True, slots=True)
class Direct(Generic[T]):
    """A table value that does not vary by drug category."""

    value: T


@dataclass(frozen=True, slots=True)
class ByCategory(Generic[T]):
    """A table value keyed by drug category."""

    values: dict[str, T]


@dataclass(frozen=True, slots=True)
class ByOffense(Generic[T]):
    """A table value keyed by offense slot ("1".."5")."""

    values: dict[str, T]


TimeLookup = Union[Direct[Duration], ByCategory[Duration]]
FineLookup = Union[ByOffense[float], ByCategory[float]]
BailModeLookup = Union[Direct[Union[BailMode, None]], ByCategory[BailMode]]
BailCostLookup = Union[Direct[float], ByCategory[float]]


@dataclass(slots=True)
class BailPolicy:
    auto: BailModeLookup
    cost: BailCostLookup


@dataclass(slots=True)
class ChargeDefinition:
    id: str
    charge: str
    type: ChargeType
    class_weights: dict[str, bool]
    valid_offense_slots: dict[str, bool]
    time: TimeLookup
    max_time: TimeLookup
    points: dict[str, float]
    fine: FineLookup
    impound: dict[str, float]
    suspension: dict[str, float]
    bail: BailPolicy | None
    definition: str | None = None
    extra: str | None = None
    drug_categories: dict[str, str] | None = None
    code_enhancement: str | None = None
    code_enhancement_min_count: int | None = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_drug_variant(self) -> bool:
        return self.drug_categories is not None


@dataclass(frozen=True, slots=True)
class Addition:
    name: str
    sentence_multiplier: float = 1.0
    points_multiplier: float = 1.0


@dataclass(slots=True)
class ChargeSelection:
    charge_id: str | None = None
    class_letter: str | None = None
    offense_slot: str | None = None
    addition_name: str | None = None
    drug_category_key: str | None = None
    unique_id: int | None = None


@dataclass(frozen=True, slots=True)
class EngineConfig:
    max_sentence_days: float
    max_impound_days: float
    max_suspension_days: float
    parole_violation_definition: str

    @property
    def max_sentence_minutes(self) -> float:
        return self.max_sentence_days * MINUTES_PER_DAY


@dataclass(slots=True)
class SentenceFigures:
    min_time: float = 0
    max_time: float = 0
    points: float = 0


@dataclass(slots=True)
class TotalFigures:
    min_time: float = 0
    max_time: float = 0
    points: float = 0
    impound: float = 0
    suspension: float = 0


@dataclass(slots=True)
class BailFlags:
    eligible: bool = False
    discretionary: bool = False
    no_bail: bool = False
    has_bail_charge: bool = False


@dataclass(slots=True)
class ChargeResult:
    row: ChargeSelection
    charge_details: ChargeDefinition
    applied_additions: list[Addition]
    sentence_multiplier: float
    points_multiplier: float
    original: SentenceFigures
    modified: SentenceFigures
    fine: float
    impound: float
    suspension: float
    bail_auto: BailMode | None
    bail_cost: float
    addition_details: Addition | None = None
    parole_addition_details: Addition | None = None

    @property
    def is_modified(self) -> bool:
        return self.sentence_multiplier != 1 or self.points_multiplier != 1


@dataclass(slots=True)
class Stipulation:
    title: str
    extra: str


@dataclass(slots=True)
class CalculationTotals:
    original: TotalFigures = field(default_factory=TotalFigures)
    modified: TotalFigures = field(default_factory=TotalFigures)
    fine: float = 0
    bail_status: BailFlags = field(default_factory=BailFlags)
    highest_bail: float = 0


@dataclass(slots=True)
class ArrestCalculation:
    calculation_results: list[ChargeResult]
    extras: list[Stipulation]
    totals: CalculationTotals
    bail_status: BailStatus
    min_time_capped: float
    max_time_capped: float
    is_capped: bool
    impound_capped: float
    is_impound_capped: bool
    suspension_capped: float
    is_suspension_capped: bool
    is_streets_eligible: bool
