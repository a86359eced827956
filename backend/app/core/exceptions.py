class PlannerError(Exception):
    """Base class for errors raised by the viewing planner."""


class ConfigurationError(PlannerError):
    """Invalid user configuration, e.g. fewer than one TV."""


class UpstreamError(PlannerError):
    """An external service (schedule feed, oracle, email API) failed."""


class OracleResponseError(UpstreamError):
    """The oracle answered, but not with a usable assignment plan."""


class EmailDeliveryError(UpstreamError):
    """The email API rejected the message."""
