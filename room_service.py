import random
import string
import time
from typing import Any, Optional

from backend import RoomBackend
from constants import MAX_OPERATIONS, TRIMMED_OPERATIONS
from errors import RoomNotFound, StorageUnavailable
from logging_config import get_logger

logger = get_logger(__name__)

ROOM_METADATA_FIELDS = ("id", "name", "method", "createdBy", "createdByName")


def now_ms() -> int:
    return int(time.time() * 1000)


def generate_operation_id(timestamp: int, length: int = 9) -> str:
    # Not collision-proof: ordering comes from timestamps, not from ids.
    suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))
    return f"op_{timestamp}_{suffix}"


def room_summary(room: dict) -> dict:
    summary = {field: room.get(field) for field in ROOM_METADATA_FIELDS}
    summary["activeUsers"] = room.get("activeUsers") or []
    return summary


class RoomService:
    """The six room operations, run against an injected key-value store.

    Every mutating operation is a plain read-modify-write of the whole room
    document. Two clients writing the same room at once can lose one of the
    updates; the last write wins.
    """

    def __init__(self, backend: Optional[RoomBackend]):
        self.backend = backend

    def _load_room(self, room_id: str) -> dict:
        if self.backend is None:
            logger.warning(f"Room store not configured, cannot load room {room_id}")
            raise StorageUnavailable()
        room = self.backend.get_room(room_id)
        if room is None:
            logger.warning(f"Room {room_id} not found")
            raise RoomNotFound(room_id)
        return room

    def create_room(self, room_id: str, room_data: dict, snapshot: Any, user_id: str = None, user_name: str = None) -> dict:
        logger.info(f"Creating room {room_id} for user {user_id} ({user_name})")
        room = {
            **(room_data or {}),
            "snapshot": snapshot,
            "operations": [],
            "lastUpdated": now_ms(),
        }
        room.setdefault("activeUsers", [])
        if self.backend is not None:
            self.backend.put_room(room_id, room)
        else:
            logger.warning(f"Room store not configured, room {room_id} was not persisted")
        return {"roomId": room_id, "message": "Room created successfully"}

    def join_room(self, room_id: str, user_id: str, user_name: str = None, user_data: Optional[dict] = None) -> dict:
        room = self._load_room(room_id)
        active_users = room.get("activeUsers") or []
        if any(isinstance(user, dict) and user.get("id") == user_id for user in active_users):
            logger.debug(f"User {user_id} already in room {room_id}")
        else:
            active_users.append(user_data if user_data is not None else {"id": user_id, "name": user_name})
            logger.info(f"User {user_id} ({user_name}) joined room {room_id}: {len(active_users)} users")
        room["activeUsers"] = active_users
        room["lastUpdated"] = now_ms()
        self.backend.put_room(room_id, room)
        return {
            "room": room_summary(room),
            "snapshot": room.get("snapshot"),
            "message": "Joined room successfully",
        }

    def leave_room(self, room_id: str, user_id: str) -> None:
        if self.backend is None:
            logger.warning(f"Room store not configured, ignoring leave of {user_id} from {room_id}")
            return
        room = self.backend.get_room(room_id)
        if room is None:
            logger.debug(f"Leave for missing room {room_id} ignored")
            return

        room["activeUsers"] = [
            user for user in room.get("activeUsers") or []
            if not (isinstance(user, dict) and user.get("id") == user_id)
        ]
        room["lastUpdated"] = now_ms()
        if not room["activeUsers"]:
            logger.info(f"Last user {user_id} left room {room_id}, deleting it")
            self.backend.delete_room(room_id)
        else:
            logger.info(f"User {user_id} left room {room_id}: {len(room['activeUsers'])} users remain")
            self.backend.put_room(room_id, room)

    def send_operation(self, room_id: str, user_id: str, operation: dict) -> None:
        room = self._load_room(room_id)
        operations = room.get("operations") or []
        timestamp = now_ms()
        operations.append({
            **(operation or {}),
            "timestamp": timestamp,
            "userId": user_id,
            "id": generate_operation_id(timestamp),
        })
        if len(operations) > MAX_OPERATIONS:
            logger.debug(f"Room {room_id} history at {len(operations)}, keeping last {TRIMMED_OPERATIONS}")
            operations = operations[-TRIMMED_OPERATIONS:]
        room["operations"] = operations
        room["lastUpdated"] = timestamp
        self.backend.put_room(room_id, room)
        logger.debug(f"Operation {operation.get('type') if operation else None} from {user_id} stored in room {room_id}")

    def get_updates(self, room_id: str, user_id: str, last_sync: Optional[int] = 0) -> dict:
        """Operations newer than `last_sync` written by anyone but `user_id`.

        A `last_sync` of None (unparseable watermark) matches nothing.
        """
        room = self._load_room(room_id)
        updates = [
            op for op in room.get("operations") or []
            if last_sync is not None and op.get("timestamp", 0) > last_sync and op.get("userId") != user_id
        ]
        logger.debug(f"Room {room_id}: {len(updates)} updates for {user_id} since {last_sync}")
        return {
            "updates": updates,
            "users": room.get("activeUsers") or [],
            "lastSync": now_ms(),
        }

    def get_room_info(self, room_id: str) -> dict:
        room = self._load_room(room_id)
        return {"room": room_summary(room), "snapshot": room.get("snapshot")}
