"""Drafter subsystem: turns a pull request into a raw deploy note candidate."""

from deploynote.drafter.context import ContextAssembler
from deploynote.drafter.models import ChangeContext, PromptSettings, RawCandidate
from deploynote.drafter.prompts import PromptTemplate
from deploynote.drafter.synthesizer import NoteSynthesizer

__all__ = [
    "ChangeContext",
    "ContextAssembler",
    "NoteSynthesizer",
    "PromptSettings",
    "PromptTemplate",
    "RawCandidate",
]
