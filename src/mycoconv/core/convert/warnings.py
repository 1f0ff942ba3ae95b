"""Ordered, append-only log of lossy-conversion notices for a single call"""


class WarningLog:
    """Collects human-readable warnings in the order they were raised."""

    def __init__(self) -> None:
        self._items: list[str] = []

    def add(self, message: str) -> None:
        self._items.append(message)

    def as_list(self) -> list[str]:
        return list(self._items)

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"WarningLog({self._items!r})"
