from fastapi import APIRouter, Depends, Request

from mathapi.models.rpc import RpcResponse
from mathapi.services.dispatcher import ProtocolDispatcher

router = APIRouter(tags=["mcp"])


def get_dispatcher() -> ProtocolDispatcher:
    return ProtocolDispatcher.from_settings()


@router.post("/mcp", response_model=RpcResponse)
async def handle_rpc(
    request: Request,
    dispatcher: ProtocolDispatcher = Depends(get_dispatcher),
) -> RpcResponse:
    """JSON-RPC over HTTP, answered by the same dispatcher as the stdio transport."""

    body = await request.body()
    return dispatcher.handle_line(body.decode("utf-8", errors="replace"))
