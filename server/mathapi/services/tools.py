from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolName(str, Enum):
    calculate_math = "calculate_math"
    latex_to_expr = "latex_to_expr"


class ToolDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: ToolName
    description: str
    parameter_schema: dict[str, Any] = Field(..., alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def _single_string_schema(parameter: str, description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            parameter: {
                "type": "string",
                "description": description,
            }
        },
        "required": [parameter],
    }


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name=ToolName.calculate_math,
        description="Evaluate a mathematical expression. LaTeX input is supported.",
        inputSchema=_single_string_schema(
            "expression",
            "Mathematical expression, either LaTeX or plain arithmetic. "
            "For example: '\\frac{1}{2} + \\sqrt{4}' or '2 + 3 * 4'",
        ),
    ),
    ToolDefinition(
        name=ToolName.latex_to_expr,
        description="Convert a LaTeX math expression into an evaluable arithmetic expression.",
        inputSchema=_single_string_schema(
            "latex",
            "LaTeX math expression, for example: '\\frac{1}{2} + \\sqrt{4}'",
        ),
    ),
)


def list_tools() -> tuple[ToolDefinition, ...]:
    return TOOL_DEFINITIONS
