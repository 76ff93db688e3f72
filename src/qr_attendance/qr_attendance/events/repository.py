from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Event, NewEvent


class EventRepository(Protocol):
    """Event storage collaborator.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Event]:
        raise NotImplementedError

    def create(self, data: NewEvent) -> str:
        """Returns the new event_id."""

        raise NotImplementedError

    def update(self, event_id: str, data: NewEvent) -> bool:
        raise NotImplementedError

    def delete(self, event_id: str) -> bool:
        raise NotImplementedError
