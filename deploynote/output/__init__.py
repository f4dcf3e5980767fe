"""Output subsystem: validates, stores and announces deploy notes."""

from deploynote.output.notifier import Notifier, render_comment
from deploynote.output.store import NoteStore, StoreOutcome, StoreResult, artifact_path
from deploynote.output.validator import DeployNote, NoteValidator, check_structure, null_note

__all__ = [
    "DeployNote",
    "NoteStore",
    "NoteValidator",
    "Notifier",
    "StoreOutcome",
    "StoreResult",
    "artifact_path",
    "check_structure",
    "null_note",
    "render_comment",
]
