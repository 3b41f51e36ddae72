from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CalculationOutcome(BaseModel):
    """Either a finite value or an error message, never both."""

    model_config = ConfigDict(frozen=True)

    value: float | None = None
    error_message: str | None = None

    @model_validator(mode="after")
    def validate_exclusive(self) -> "CalculationOutcome":
        if (self.value is None) == (self.error_message is None):
            raise ValueError("Exactly one of value or error_message must be set.")
        return self

    @property
    def is_error(self) -> bool:
        return self.error_message is not None

    def as_number(self) -> int | float:
        if self.value is None:
            raise ValueError("Failed calculations carry no value.")
        if self.value.is_integer():
            return int(self.value)
        return self.value


class CalculateRequest(BaseModel):
    expression: str = Field(..., description="Arithmetic or LaTeX expression to evaluate.")


class CalculateResponse(BaseModel):
    result: float | int = Field(..., description="The evaluated numerical result, 0.0 on failure.")
    expression: str = Field(..., description="The expression exactly as submitted.")
    success: bool = Field(..., description="Whether the evaluation succeeded.")
    error: str | None = Field(default=None, description="Error text when the evaluation failed.")


class HealthResponse(BaseModel):
    status: str
    version: str
    service: str
