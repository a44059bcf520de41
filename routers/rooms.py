from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from typing import Optional
from pydantic import BaseModel
import re
from backend import RoomBackend, get_backend
from constants import CORS_HEADERS
from errors import CollabError, UnknownAction
from room_service import RoomService
from schemas.rooms import (
    CreateRoomRequest, CreateRoomResponse, JoinRoomRequest, JoinRoomResponse, LeaveRoomRequest,
    SendOperationRequest, RoomInfoResponse, UpdatesResponse, SuccessResponse, ErrorResponse, HealthResponse,
)
from logging_config import get_logger

logger = get_logger(__name__)

rooms_router = APIRouter(tags=["rooms"])


def json_response(body: BaseModel, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        content=body.model_dump(exclude_none=isinstance(body, ErrorResponse)),
        status_code=status_code,
        headers=CORS_HEADERS,
    )


LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_last_sync(value: Optional[str]) -> Optional[int]:
    """Read the leading integer of `lastSync` ("1700000000000.0" -> 1700000000000).

    Missing or empty means 0. A value with no leading digits gives None,
    which matches no operation at all.
    """
    if not value:
        return 0
    match = LEADING_INT.match(value)
    return int(match.group(1)) if match else None


async def read_body(request: Request) -> dict:
    """Parse the JSON body once; Starlette caches it for later reads."""
    raw = await request.body()
    if not raw.strip():
        return {}
    return await request.json()


async def create_room(request: Request, service: RoomService):
    body = CreateRoomRequest.model_validate(await read_body(request))
    result = service.create_room(body.roomId, body.roomData, body.snapshot, body.userId, body.userName)
    return json_response(CreateRoomResponse(**result))


async def join_room(request: Request, service: RoomService):
    body = JoinRoomRequest.model_validate(await read_body(request))
    result = service.join_room(body.roomId, body.userId, body.userName, body.userData)
    return json_response(JoinRoomResponse(**result))


async def leave_room(request: Request, service: RoomService):
    body = LeaveRoomRequest.model_validate(await read_body(request))
    service.leave_room(body.roomId, body.userId)
    return json_response(SuccessResponse())


async def send_operation(request: Request, service: RoomService):
    body = SendOperationRequest.model_validate(await read_body(request))
    service.send_operation(body.roomId, body.userId, body.operation)
    return json_response(SuccessResponse())


async def get_updates(request: Request, service: RoomService):
    params = request.query_params
    last_sync = parse_last_sync(params.get("lastSync"))
    result = service.get_updates(params.get("roomId"), params.get("userId"), last_sync)
    return json_response(UpdatesResponse(**result))


async def get_room_info(request: Request, service: RoomService):
    result = service.get_room_info(request.query_params.get("roomId"))
    return json_response(RoomInfoResponse(**result))


ACTIONS = {
    "create_room": create_room,
    "join_room": join_room,
    "leave_room": leave_room,
    "send_operation": send_operation,
    "get_updates": get_updates,
    "get_room_info": get_room_info,
}


@rooms_router.options("/collab")
async def collab_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@rooms_router.api_route("/collab", methods=["GET", "POST"])
async def collab(request: Request, backend: Optional[RoomBackend] = Depends(get_backend)):
    """
    Single entry point for every room operation.

    The operation is picked by `action`, taken from the query string or,
    failing that, from the JSON body:
    - create_room, join_room, leave_room, send_operation: JSON body
    - get_updates, get_room_info: query parameters
    """
    client_host = request.client.host if request.client else 'unknown'
    service = RoomService(backend)
    action = None
    try:
        action = request.query_params.get("action")
        if not action:
            body = await read_body(request)
            action = body.get("action") if isinstance(body, dict) else None

        handler = ACTIONS.get(action)
        if handler is None:
            raise UnknownAction(action)

        logger.info(f"{request.method} collab action={action} from {client_host}")
        return await handler(request, service)
    except CollabError as e:
        logger.warning(f"Action {action} failed with {e.status_code}: {e.message}")
        return json_response(ErrorResponse(error=e.message), status_code=e.status_code)
    except Exception as e:
        logger.error(f"Error handling action {action}: {e}", exc_info=True)
        return json_response(ErrorResponse(error=str(e), code="INTERNAL_ERROR"), status_code=500)


@rooms_router.get("/health", response_model=HealthResponse)
async def health(backend: Optional[RoomBackend] = Depends(get_backend)):
    if backend is None:
        return HealthResponse(ok=False, store="none")
    return HealthResponse(ok=backend.ping(), store=backend.name)
