"""
Aggregate Root Base Class
Manages domain events and acts as consistency boundary
"""
from __future__ import annotations

from typing import Any
from uuid import UUID

from shared.domain.base_entity import BaseEntity
from shared.domain.domain_event import DomainEvent


class BaseAggregateRoot(BaseEntity):
    """
    Base class for aggregate roots.

    Aggregate roots keep a list of domain events raised during an operation.
    Infrastructure collects them after the unit of work commits.
    """

    def __init__(self, id: UUID | None = None, **kwargs: Any) -> None:
        super().__init__(id=id, **kwargs)
        self._domain_events: list[DomainEvent] = []

    def raise_event(self, event: DomainEvent) -> None:
        """Record a domain event, enriching it with aggregate context."""
        if event.aggregate_id is None and self.id is not None:
            object.__setattr__(event, "aggregate_id", self.id)
        if not event.aggregate_type:
            object.__setattr__(event, "aggregate_type", self.__class__.__name__)
        self._domain_events.append(event)

    def collect_domain_events(self) -> list[DomainEvent]:
        """
        Collect and clear domain events.

        Events raised before the aggregate had an id are stamped with it
        here, once persistence has assigned one.
        """
        events = []
        for event in self._domain_events:
            if event.aggregate_id is None and self.id is not None:
                object.__setattr__(event, "aggregate_id", self.id)
            events.append(event)
        self._domain_events.clear()
        return events

    @property
    def has_domain_events(self) -> bool:
        return len(self._domain_events) > 0
