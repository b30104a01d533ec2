from __future__ import annotations


class SchedulerError(ValueError):
    """Base class for every error raised at the engine boundary."""


class InvalidInputError(SchedulerError):
    pass


class MissingParameterError(SchedulerError):
    pass


class EmptyProcessSetError(SchedulerError):
    pass


class UnknownAlgorithmError(SchedulerError):
    pass
