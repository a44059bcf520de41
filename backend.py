import json
import threading
from typing import Optional, Protocol

import redis

from constants import STORE_BACKEND, REDIS_HOST, REDIS_PORT, REDIS_PASSWORD, REDIS_DB
from redis_keys import REDIS_ROOM_KEY
from logging_config import get_logger

logger = get_logger(__name__)


class RoomBackend(Protocol):
    """Key-value store holding one JSON document per room.

    Each call is atomic on its own; nothing spans a read and the write that
    follows it.
    """

    name: str

    def get_room(self, room_id: str) -> Optional[dict]: ...

    def put_room(self, room_id: str, room: dict) -> None: ...

    def delete_room(self, room_id: str) -> None: ...

    def ping(self) -> bool: ...


class RedisBackend:
    name = "redis"

    def __init__(self, client: Optional[redis.Redis] = None):
        # redis.Redis connects lazily, so building the backend never touches the network
        self.redis_client = client or redis.Redis(
            host=REDIS_HOST, port=REDIS_PORT, password=REDIS_PASSWORD, db=REDIS_DB, decode_responses=True
        )
        logger.info(f"Initializing RedisBackend for {REDIS_HOST}:{REDIS_PORT}/{REDIS_DB}")

    def get_room(self, room_id: str) -> Optional[dict]:
        logger.debug(f"Fetching room {room_id}")
        key = REDIS_ROOM_KEY.format(room_id=room_id)
        raw = self.redis_client.get(key)
        if not raw:
            logger.debug(f"Room {room_id} not found in Redis")
            return None
        return json.loads(raw)

    def put_room(self, room_id: str, room: dict) -> None:
        key = REDIS_ROOM_KEY.format(room_id=room_id)
        self.redis_client.set(key, json.dumps(room))
        logger.debug(f"Room {room_id} stored under {key}")

    def delete_room(self, room_id: str) -> None:
        key = REDIS_ROOM_KEY.format(room_id=room_id)
        deleted = self.redis_client.delete(key)
        logger.debug(f"Room {room_id} deleted: key={deleted}")

    def ping(self) -> bool:
        try:
            return bool(self.redis_client.ping())
        except redis.RedisError as e:
            logger.error(f"Redis ping failed for {REDIS_HOST}:{REDIS_PORT}: {e}")
            return False


class MemoryBackend:
    """In-process store for local development and tests.

    Documents are kept serialized so callers never share mutable state with
    the store, the same as with Redis.
    """

    name = "memory"

    def __init__(self):
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get_room(self, room_id: str) -> Optional[dict]:
        with self._lock:
            raw = self._data.get(REDIS_ROOM_KEY.format(room_id=room_id))
        return json.loads(raw) if raw else None

    def put_room(self, room_id: str, room: dict) -> None:
        payload = json.dumps(room)
        with self._lock:
            self._data[REDIS_ROOM_KEY.format(room_id=room_id)] = payload

    def delete_room(self, room_id: str) -> None:
        with self._lock:
            self._data.pop(REDIS_ROOM_KEY.format(room_id=room_id), None)

    def ping(self) -> bool:
        return True

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._data)


def build_backend(kind: str = STORE_BACKEND) -> Optional[RoomBackend]:
    """Build the store selected by STORE_BACKEND.

    "none" and any unrecognised value leave the store unconfigured, so room
    operations answer with StorageUnavailable instead of failing outright.
    """
    if kind == "redis":
        return RedisBackend()
    if kind == "memory":
        return MemoryBackend()
    if kind == "none":
        logger.warning("STORE_BACKEND=none: room store is not configured")
        return None
    logger.error(f"Unsupported STORE_BACKEND {kind!r}: room store is not configured")
    return None


_backend: Optional[RoomBackend] = None
_backend_ready = False
_backend_lock = threading.Lock()


def get_backend() -> Optional[RoomBackend]:
    """FastAPI dependency returning the process-wide store (built on first use)."""
    global _backend, _backend_ready
    with _backend_lock:
        if not _backend_ready:
            _backend = build_backend()
            _backend_ready = True
    return _backend
