"""FastAPI entrypoint for the arrest calculator."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from arrest_calculator.api.schemas import (
    AdditionOut,
    AdditionsResponse,
    ArrestCalculationResponse,
    ArrestCalculatorRequest,
    BailFlagsOut,
    CalculationTotalsOut,
    ChargeResultOut,
    CodeEnhancementRequest,
    CodeEnhancementResponse,
    SelectedChargeIn,
    SentenceFiguresOut,
    StipulationOut,
    TotalFiguresOut,
)
from arrest_calculator.catalog.repository import CatalogRepository
from arrest_calculator.config import get_settings
from arrest_calculator.core.calculator import calculate_arrest
from arrest_calculator.core.catalog import selectable_additions
from arrest_calculator.core.code_enhancement import is_enhancement_eligible
from arrest_calculator.core.types import (
    Addition,
    ArrestCalculation,
    ChargeResult,
    ChargeSelection,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Arrest Calculator API", version="0.1.0")


@lru_cache
def get_repository() -> CatalogRepository:
    return CatalogRepository(get_settings())


@app.exception_handler(RequestValidationError)
async def invalid_report_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid report data"})


def to_selection(item: SelectedChargeIn) -> ChargeSelection:
    return ChargeSelection(
        charge_id=item.charge_id,
        class_letter=item.class_letter,
        offense_slot=item.offense,
        addition_name=item.addition,
        drug_category_key=item.category,
        unique_id=item.unique_id,
    )


def to_addition_out(addition: Addition | None) -> AdditionOut | None:
    if addition is None:
        return None
    return AdditionOut(
        name=addition.name,
        sentence_multiplier=addition.sentence_multiplier,
        points_multiplier=addition.points_multiplier,
    )


def to_row_out(selection: ChargeSelection) -> SelectedChargeIn:
    return SelectedChargeIn(
        unique_id=selection.unique_id,
        charge_id=selection.charge_id,
        class_letter=selection.class_letter,
        offense=selection.offense_slot,
        addition=selection.addition_name,
        category=selection.drug_category_key,
    )


def to_charge_result_out(result: ChargeResult) -> ChargeResultOut:
    return ChargeResultOut(
        row=to_row_out(result.row),
        charge_details=result.charge_details.raw,
        addition_details=to_addition_out(result.addition_details),
        parole_addition_details=to_addition_out(result.parole_addition_details),
        applied_additions=[to_addition_out(a) for a in result.applied_additions],
        sentence_multiplier=result.sentence_multiplier,
        points_multiplier=result.points_multiplier,
        is_modified=result.is_modified,
        original=SentenceFiguresOut(
            min_time=result.original.min_time,
            max_time=result.original.max_time,
            points=result.original.points,
        ),
        modified=SentenceFiguresOut(
            min_time=result.modified.min_time,
            max_time=result.modified.max_time,
            points=result.modified.points,
        ),
        fine=result.fine,
        impound=result.impound,
        suspension=result.suspension,
        bail_auto=result.bail_auto.wire_value if result.bail_auto is not None else None,
        bail_cost=result.bail_cost,
    )


def to_response_payload(result: ArrestCalculation) -> ArrestCalculationResponse:
    totals = result.totals
    return ArrestCalculationResponse(
        calculation_results=[to_charge_result_out(r) for r in result.calculation_results],
        extras=[StipulationOut(title=e.title, extra=e.extra) for e in result.extras],
        totals=CalculationTotalsOut(
            original=TotalFiguresOut(
                min_time=totals.original.min_time,
                max_time=totals.original.max_time,
                points=totals.original.points,
                impound=totals.original.impound,
                suspension=totals.original.suspension,
            ),
            modified=TotalFiguresOut(
                min_time=totals.modified.min_time,
                max_time=totals.modified.max_time,
                points=totals.modified.points,
                impound=totals.modified.impound,
                suspension=totals.modified.suspension,
            ),
            fine=totals.fine,
            bail_status=BailFlagsOut(
                eligible=totals.bail_status.eligible,
                discretionary=totals.bail_status.discretionary,
                no_bail=totals.bail_status.no_bail,
                has_bail_charge=totals.bail_status.has_bail_charge,
            ),
            highest_bail=totals.highest_bail,
        ),
        bail_status=result.bail_status,
        min_time_capped=result.min_time_capped,
        max_time_capped=result.max_time_capped,
        is_capped=result.is_capped,
        impound_capped=result.impound_capped,
        is_impound_capped=result.is_impound_capped,
        suspension_capped=result.suspension_capped,
        is_suspension_capped=result.is_suspension_capped,
        is_streets_eligible=result.is_streets_eligible,
    )


@app.get("/v1/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/v1/arrest_calculator", response_model=ArrestCalculationResponse)
def arrest_calculator_endpoint(req: ArrestCalculatorRequest):
    try:
        repo = get_repository()
        result = calculate_arrest(
            [to_selection(item) for item in req.report],
            req.is_parole_violator,
            repo.penal_code,
            repo.additions,
            get_settings().engine_config(),
        )
        return to_response_payload(result)
    except Exception:
        logger.exception("Arrest calculation failed")
        return JSONResponse(status_code=500, content={"error": "Failed to calculate arrest"})


@app.post("/v1/code_enhancement", response_model=CodeEnhancementResponse)
def code_enhancement_endpoint(req: CodeEnhancementRequest) -> CodeEnhancementResponse:
    repo = get_repository()
    selections = [to_selection(item) for item in req.report]
    definitions = [repo.fetch_charge(s.charge_id) if s.charge_id else None for s in selections]
    return CodeEnhancementResponse(
        is_streets_eligible=is_enhancement_eligible(selections, definitions)
    )


@app.get("/v1/additions", response_model=AdditionsResponse)
def additions_endpoint() -> AdditionsResponse:
    repo = get_repository()
    config = get_settings().engine_config()
    return AdditionsResponse(
        additions=[to_addition_out(a) for a in selectable_additions(repo.additions, config)]
    )
