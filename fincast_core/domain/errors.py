from __future__ import annotations


class ForecastEngineError(ValueError):
    """Base class for input-validation failures raised by the engine."""


class InsufficientDataError(ForecastEngineError):
    """The series is too short for the requested algorithm."""


class InvalidParameterError(ForecastEngineError):
    """A parameter is outside its accepted range."""
