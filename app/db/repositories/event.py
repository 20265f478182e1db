from typing import List, Optional

from app.db.models.event import Event
from app.db.models.event_result import EventResult
from app.db.repositories.base import BaseRepository


class EventRepository(BaseRepository):

    def get_event(self, event_id: int) -> Optional[Event]:
        return self.db.get(Event, event_id)

    def list_events_by_season(self, season_id: int) -> List[Event]:
        return (
            self.db.query(Event)
            .filter(Event.season_id == season_id)
            .order_by(Event.event_datetime, Event.id)
            .all()
        )

    def get_event_result(self, event_id: int) -> Optional[EventResult]:
        return self.db.get(EventResult, event_id)

    def upsert_event_result(self, result: EventResult) -> EventResult:
        return self._upsert(result)
