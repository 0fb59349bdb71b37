"""Exceptions raised by the dispatch engine."""


class DispatchError(Exception):
    """Base exception for dispatch engine errors."""

    pass


class EventDecodeError(DispatchError):
    """Payload is not a well-formed event envelope."""

    pass


class UnknownEntityError(DispatchError):
    """An event referenced an officer or incident that is not live."""

    def __init__(self, kind: str, entity_id: int):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"Unknown {kind} id={entity_id}")


class DuplicateEntityError(DispatchError):
    """An entity with the same id is already live."""

    def __init__(self, kind: str, entity_id: int):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"Duplicate {kind} id={entity_id}")


class AssignmentConflictError(DispatchError):
    """Assignment would relink an officer or incident that is already taken."""

    pass


class UnknownEventTypeError(EventDecodeError):
    """Envelope is well formed but its type has no handler."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(f"Unknown event type: {event_type}")
