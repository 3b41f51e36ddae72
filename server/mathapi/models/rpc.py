from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_PARAMS = -32602

# Strict members keep ids such as `true` or "1" exactly as the caller sent them.
RequestId = Union[StrictBool, StrictInt, StrictFloat, StrictStr, None]


class RpcRequest(BaseModel):
    jsonrpc: str = Field(JSONRPC_VERSION, description="Protocol version, echoed but not enforced.")
    method: str = Field(..., description="Name of the method to invoke.")
    params: Any | None = Field(default=None, description="Method parameters.")
    id: RequestId = Field(default=None, description="Caller supplied id copied to the response.")


class RpcError(BaseModel):
    code: int
    message: str
    data: Any | None = None


class RpcResponse(BaseModel):
    jsonrpc: str = JSONRPC_VERSION
    result: Any | None = None
    error: RpcError | None = None
    id: RequestId = None

    @classmethod
    def success(cls, result: Any, request_id: RequestId) -> "RpcResponse":
        return cls(result=result, id=request_id)

    @classmethod
    def failure(cls, code: int, message: str, request_id: RequestId) -> "RpcResponse":
        return cls(error=RpcError(code=code, message=message), id=request_id)

    def to_json(self) -> str:
        return self.model_dump_json()
