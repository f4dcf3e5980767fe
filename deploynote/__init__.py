"""deploynote: generate, commit and announce deploy notes for pull requests."""

from deploynote.errors import (
    ConfigurationError,
    ConflictError,
    ConsistencyError,
    DeployNoteError,
    NotFoundError,
    SynthesisError,
    TransportError,
)
from deploynote.pipeline import DeployNotePipeline, PipelineResult

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConflictError",
    "ConsistencyError",
    "DeployNoteError",
    "DeployNotePipeline",
    "NotFoundError",
    "PipelineResult",
    "SynthesisError",
    "TransportError",
    "__version__",
]
