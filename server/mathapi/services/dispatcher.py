from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Callable

from pydantic import ValidationError

from mathapi.core.config import AppSettings, get_settings
from mathapi.core.exceptions import AppError
from mathapi.models.rpc import INVALID_PARAMS, PARSE_ERROR, RequestId, RpcRequest, RpcResponse
from mathapi.services.calculator import CalculatorService
from mathapi.services.tools import ToolName, list_tools

logger = logging.getLogger("mathapi.rpc")


class RpcMethod(str, Enum):
    initialize = "initialize"
    tools_list = "tools/list"
    tools_call = "tools/call"


class ProtocolError(AppError):
    status_code = 400
    error_type = "PROTOCOL_ERROR"
    rpc_code = INVALID_PARAMS


def _text_content(text: str, *, is_error: bool = False) -> dict[str, Any]:
    payload: dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        payload["isError"] = True
    return payload


def _scalar_id(payload: Any) -> RequestId:
    if isinstance(payload, dict):
        value = payload.get("id")
        if isinstance(value, (str, int, float, bool)):
            return value
    return None


class ProtocolDispatcher:
    """
    Stateless JSON-RPC handler for the MCP methods ``initialize``, ``tools/list``
    and ``tools/call``.

    Every failure is answered with an error envelope; nothing raised while
    handling a request escapes ``handle``.
    """

    def __init__(self, calculator: CalculatorService, settings: AppSettings | None = None) -> None:
        self._calculator = calculator
        self._settings = settings or get_settings()
        self._methods: dict[RpcMethod, Callable[[Any], dict[str, Any]]] = {
            RpcMethod.initialize: self._initialize,
            RpcMethod.tools_list: self._list_tools,
            RpcMethod.tools_call: self._call_tool,
        }
        self._tools: dict[ToolName, Callable[[dict[str, Any]], dict[str, Any]]] = {
            ToolName.calculate_math: self._calculate_math,
            ToolName.latex_to_expr: self._latex_to_expr,
        }

    @classmethod
    def from_settings(cls) -> "ProtocolDispatcher":
        return cls(CalculatorService.from_settings(), get_settings())

    def handle_line(self, line: str) -> RpcResponse:
        try:
            payload = json.loads(line)
        except (ValueError, RecursionError) as exc:
            logger.warning("rpc.parse_failed", extra={"reason": str(exc)})
            return RpcResponse.failure(PARSE_ERROR, f"Parse error: {exc}", None)
        return self.handle_payload(payload)

    def handle_payload(self, payload: Any) -> RpcResponse:
        try:
            request = RpcRequest.model_validate(payload)
        except ValidationError as exc:
            logger.warning("rpc.invalid_request", extra={"errors": exc.error_count()})
            return RpcResponse.failure(INVALID_PARAMS, "Invalid request", _scalar_id(payload))
        return self.handle(request)

    def handle(self, request: RpcRequest) -> RpcResponse:
        logger.info("rpc.dispatch", extra={"rpc_method": request.method})
        try:
            result = self._dispatch(request)
        except ProtocolError as exc:
            logger.info("rpc.error", extra={"rpc_method": request.method, "reason": exc.message})
            return RpcResponse.failure(exc.rpc_code, exc.message, request.id)
        return RpcResponse.success(result, request.id)

    def _dispatch(self, request: RpcRequest) -> dict[str, Any]:
        try:
            method = RpcMethod(request.method)
        except ValueError:
            raise ProtocolError(f"Unknown method: {request.method}") from None
        return self._methods[method](request.params)

    def _initialize(self, params: Any) -> dict[str, Any]:
        settings = self._settings
        return {
            "protocolVersion": settings.mcp_protocol_version,
            "serverInfo": {
                "name": settings.mcp_server_name,
                "version": settings.mcp_server_version,
            },
            "capabilities": {"tools": {}},
        }

    def _list_tools(self, params: Any) -> dict[str, Any]:
        return {"tools": [tool.to_wire() for tool in list_tools()]}

    def _call_tool(self, params: Any) -> dict[str, Any]:
        if params is None:
            raise ProtocolError("Missing tool call parameters")
        if not isinstance(params, dict):
            params = {}

        name = params.get("name")
        if not isinstance(name, str):
            raise ProtocolError("Tool name is required")

        arguments = params.get("arguments")
        if arguments is None:
            raise ProtocolError("Tool arguments are required")
        if not isinstance(arguments, dict):
            arguments = {}

        try:
            tool = ToolName(name)
        except ValueError:
            raise ProtocolError(f"Unknown tool: {name}") from None

        logger.info("rpc.tool_call", extra={"tool": tool.value})
        return self._tools[tool](arguments)

    def _calculate_math(self, arguments: dict[str, Any]) -> dict[str, Any]:
        expression = arguments.get("expression")
        if not isinstance(expression, str):
            return _text_content("Argument not provided: expression", is_error=True)

        outcome = self._calculator.calculate(expression)
        if outcome.is_error:
            return _text_content(f"Calculation failed: {outcome.error_message}", is_error=True)

        return _text_content(
            f"Expression: {expression}\n"
            f"Result: {outcome.as_number()}\n"
            f"Normalized expression: {self._calculator.normalize(expression)}"
        )

    def _latex_to_expr(self, arguments: dict[str, Any]) -> dict[str, Any]:
        latex = arguments.get("latex")
        if not isinstance(latex, str):
            return _text_content("Argument not provided: latex", is_error=True)

        return _text_content(f"LaTeX: {latex}\nNormalized expression: {self._calculator.normalize(latex)}")
