"""Errors raised by the stats and schedule services."""


class InvalidInputError(ValueError):
    """Input the services cannot act on; routes map it to HTTP 422."""


class InvalidTransitionError(InvalidInputError):
    """A scheduled workout cannot move from its current status."""

    def __init__(self, workout_id: str, from_status: str, action: str):
        self.workout_id = workout_id
        self.from_status = from_status
        self.action = action
        super().__init__(f"Cannot {action} workout '{workout_id}' with status '{from_status}'")


class NoPreferredDaysError(InvalidInputError):
    """Batch rescheduling was requested without any preferred days."""

    def __init__(self, missed_count: int):
        self.missed_count = missed_count
        super().__init__(
            f"No preferred days configured; nothing to do for {missed_count} missed workout(s)"
        )
