"""Domain errors."""

from uuid import UUID


class InvalidEntryKind(ValueError):
    """Raised when a log entry references both or neither of food item and dish."""

    def __init__(self, entry_id: UUID | None, detail: str) -> None:
        self.entry_id = entry_id
        self.detail = detail
        super().__init__(f"Log entry {entry_id}: {detail}")


class InvalidDateRange(ValueError):
    """Raised when a requested day range is empty or inverted."""
