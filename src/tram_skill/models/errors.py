"""Failures surfaced to the caller as spoken messages."""


class ItineraryError(Exception):
    """Base class for recoverable request failures."""


class UnknownStop(ItineraryError):
    """A place name could not be resolved to any stop."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No stop matches {name!r}")
        self.name = name


class MissingDeparture(ItineraryError):
    """No departure given and no stored default."""


class MissingDestination(ItineraryError):
    """No destination given and no stored default."""


class ScheduleError(ItineraryError):
    """The schedule source could not answer."""


class NetworkFailure(ScheduleError):
    """The schedule source could not be reached (transport error or timeout)."""


class ScheduleUnavailable(ScheduleError):
    """The schedule source answered with something that could not be parsed."""


class UnsupportedIntent(ItineraryError):
    """The intent name is not handled by the skill."""

    def __init__(self, intent_name: str) -> None:
        super().__init__(f"Unsupported intent {intent_name!r}")
        self.intent_name = intent_name


class InvalidLeadTime(ItineraryError):
    """The lead time slot is not a duration we understand."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid lead time {value!r}")
        self.value = value
