"""Error hierarchy for the deploy note pipeline."""

from __future__ import annotations


class DeployNoteError(Exception):
    """Base class for every error the pipeline raises on purpose."""


class ConfigurationError(DeployNoteError):
    """A required setting or credential is missing or malformed."""


class TransportError(DeployNoteError):
    """A collaborator call failed or returned an unexpected status.

    The original exception is chained as ``__cause__`` and kept on ``cause``
    so the top-level handler can log it.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        *,
        status: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.operation = operation
        self.status = status
        self.cause = cause
        super().__init__(f"{operation} failed: {message}")
        if cause is not None:
            self.__cause__ = cause


class NotFoundError(TransportError):
    """The collaborator reported that the requested object does not exist."""


class ConflictError(TransportError):
    """A conditional write was rejected because the artifact moved."""


class SynthesisError(DeployNoteError):
    """The generative model could not produce a candidate note."""


class ValidationError(DeployNoteError):
    """A candidate note failed a structural check.

    Never propagates out of the validator; kept so the reasons have a type.
    """

    def __init__(self, reasons: list[str]) -> None:
        self.reasons = reasons
        super().__init__("; ".join(reasons))


class ConsistencyError(DeployNoteError):
    """A write reported success but the artifact could not be read back."""


__all__ = [
    "ConfigurationError",
    "ConflictError",
    "ConsistencyError",
    "DeployNoteError",
    "NotFoundError",
    "SynthesisError",
    "TransportError",
    "ValidationError",
]
