from pydantic import BaseModel
from typing import Any, Optional


class CreateRoomRequest(BaseModel):
    roomId: Optional[str] = None
    roomData: Optional[dict[str, Any]] = None
    snapshot: Any = None
    userId: Optional[str] = None
    userName: Optional[str] = None

class CreateRoomResponse(BaseModel):
    success: bool = True
    roomId: Optional[str]
    message: str

class JoinRoomRequest(BaseModel):
    roomId: Optional[str] = None
    userId: Optional[str] = None
    userName: Optional[str] = None
    userData: Optional[dict[str, Any]] = None

class LeaveRoomRequest(BaseModel):
    roomId: Optional[str] = None
    userId: Optional[str] = None

class SendOperationRequest(BaseModel):
    roomId: Optional[str] = None
    userId: Optional[str] = None
    operation: Optional[dict[str, Any]] = None

class RoomSummary(BaseModel):
    id: Any = None
    name: Any = None
    method: Any = None
    createdBy: Any = None
    createdByName: Any = None
    activeUsers: list[Any] = []

class JoinRoomResponse(BaseModel):
    success: bool = True
    room: RoomSummary
    snapshot: Any = None
    message: str

class RoomInfoResponse(BaseModel):
    success: bool = True
    room: RoomSummary
    snapshot: Any = None

class UpdatesResponse(BaseModel):
    success: bool = True
    updates: list[dict[str, Any]]
    users: list[Any]
    lastSync: int

class SuccessResponse(BaseModel):
    success: bool = True

class ErrorResponse(BaseModel):
    error: str
    code: Optional[str] = None

class HealthResponse(BaseModel):
    ok: bool
    store: str
