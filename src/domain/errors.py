"""Domain faults raised by entities and the reservation engine."""


class InvalidFieldValue(ValueError):
    """A value violates a domain invariant; ``field`` names the culprit."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class InvalidStateTransition(Exception):
    """Raised when a trip or vehicle change violates its state machine."""
