from typing import Any, Protocol


class Transport(Protocol):
    """What the session core needs from the realtime layer.

    Sends are fire-and-forget; nothing here waits for delivery.
    """

    def emit(self, connection_id: str, event: str, payload: Any) -> None:
        ...

    def broadcast(self, room: str, event: str, payload: Any) -> None:
        ...

    def join(self, connection_id: str, room: str) -> None:
        ...

    def close_room(self, room: str) -> None:
        ...
