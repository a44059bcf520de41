class CollabError(Exception):
    """Error with a known HTTP status, rendered as {"error": message}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RoomNotFound(CollabError):
    status_code = 404

    def __init__(self, room_id: str):
        super().__init__("Room not found")
        self.room_id = room_id


class StorageUnavailable(CollabError):
    status_code = 500

    def __init__(self):
        super().__init__("Room store is not configured")


class UnknownAction(CollabError):
    status_code = 400

    def __init__(self, action):
        super().__init__(f"Unknown action: {action}")
        self.action = action
