import threading
from typing import Dict, Optional, Protocol


class ReceiptStore(Protocol):
    def put(self, receipt_id: str, points: int) -> None: ...

    def get(self, receipt_id: str) -> Optional[int]: ...

    def exists(self, receipt_id: str) -> bool: ...

    def __len__(self) -> int: ...


class InMemoryReceiptStore:
    """
    Process-lifetime (receipt id -> reward points) mapping. A single lock guards
    the dict so the store can be shared by a threaded server.
    """

    def __init__(self):
        self._points: Dict[str, int] = {}
        self._lock = threading.Lock()

    def put(self, receipt_id: str, points: int) -> None:
        with self._lock:
            self._points[receipt_id] = points

    def get(self, receipt_id: str) -> Optional[int]:
        with self._lock:
            return self._points.get(receipt_id)

    def exists(self, receipt_id: str) -> bool:
        with self._lock:
            return receipt_id in self._points

    def __len__(self) -> int:
        with self._lock:
            return len(self._points)
