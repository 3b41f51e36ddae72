import logging

from fastapi import APIRouter, Depends

from mathapi.models.calculator import CalculateRequest, CalculateResponse
from mathapi.services.calculator import CalculatorError, CalculatorService

logger = logging.getLogger("mathapi.calculator")

router = APIRouter(tags=["calculator"])


def get_calculator_service() -> CalculatorService:
    return CalculatorService.from_settings()


@router.post(
    "/calculate",
    response_model=CalculateResponse,
    responses={400: {"model": CalculateResponse, "description": "The expression could not be evaluated."}},
)
async def calculate_expression(
    payload: CalculateRequest,
    service: CalculatorService = Depends(get_calculator_service),
) -> CalculateResponse:
    logger.info("calculation.request", extra={"expression": payload.expression})
    outcome = service.calculate(payload.expression)
    if outcome.is_error:
        raise CalculatorError(outcome.error_message, expression=payload.expression)

    return CalculateResponse(
        result=outcome.as_number(),
        expression=payload.expression,
        success=True,
        error=None,
    )
