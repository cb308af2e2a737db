"""Exception hierarchy for the odds engine."""


class OddsEngineError(Exception):
    """Base class for odds engine failures."""


class ConfigurationError(OddsEngineError):
    """Raised when an engine is built with an invalid configuration."""


class ContractViolationError(OddsEngineError):
    """Raised when a pipeline stage receives values it must never see.

    These indicate a programming error in the calling stage (non-positive
    stake, odds <= 1.0, probabilities outside (0, 1)), not bad user input.
    """
