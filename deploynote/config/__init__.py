from .loader import load_config
from .models import (
    DeployNoteConfig,
    LLMSettings,
    StoreConfig,
    TriggerConfig,
    VCSConfig,
)

__all__ = [
    "DeployNoteConfig",
    "LLMSettings",
    "StoreConfig",
    "TriggerConfig",
    "VCSConfig",
    "load_config",
]
