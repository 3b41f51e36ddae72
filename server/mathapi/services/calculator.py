from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from mathapi.core.config import get_settings
from mathapi.core.exceptions import AppError
from mathapi.models.calculator import CalculationOutcome
from mathapi.services.evaluator import EvaluationError, evaluate
from mathapi.services.normalizer import DEFAULT_MAX_PASSES, normalize

logger = logging.getLogger("mathapi.calculator")

CALCULATION_ERROR_PREFIX = "Calculation error: "
INVALID_RESULT_MESSAGE = "Invalid calculation result"


class CalculatorError(AppError):
    status_code = 400
    error_type = "CALCULATOR_ERROR"

    def __init__(self, message: str, *, expression: str) -> None:
        super().__init__(message, details={"expression": expression})
        self.expression = expression

    def to_payload(self) -> dict:
        return {
            "result": 0.0,
            "expression": self.expression,
            "success": False,
            "error": self.message,
        }


@dataclass
class CalculatorService:
    """Normalizes LaTeX input, evaluates it, and rejects non-finite values."""

    max_passes: int = DEFAULT_MAX_PASSES
    evaluator: Callable[[str], float] = evaluate

    @classmethod
    def from_settings(cls) -> "CalculatorService":
        settings = get_settings()
        return cls(max_passes=settings.normalizer_max_passes)

    def normalize(self, expression: str) -> str:
        return normalize(expression, self.max_passes)

    def calculate(self, expression: str) -> CalculationOutcome:
        normalized = self.normalize(expression)
        try:
            value = self.evaluator(normalized)
        except EvaluationError as exc:
            logger.info("calculation.failed", extra={"expression": expression, "reason": exc.message})
            return CalculationOutcome(error_message=f"{CALCULATION_ERROR_PREFIX}{exc.message}")

        if math.isnan(value) or not math.isfinite(value):
            logger.info("calculation.invalid_result", extra={"expression": expression})
            return CalculationOutcome(error_message=INVALID_RESULT_MESSAGE)

        return CalculationOutcome(value=value)
