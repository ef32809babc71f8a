"""Error types raised by the forecasting engine."""


class InvalidConfiguration(ValueError):
    """A configuration that cannot be simulated.

    Raised before the first day is simulated so a run either completes or
    fails as a whole.
    """
