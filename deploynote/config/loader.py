"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from deploynote.errors import ConfigurationError

from .models import DeployNoteConfig

# Trigger fields that fall back to the variables the CI workflow exports.
_TRIGGER_ENV: dict[str, str] = {
    "repository": "REPOSITORY",
    "pr_number": "PR_NUMBER",
}


def load_config(cli_path: str | None = None) -> DeployNoteConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./deploynote.yaml"),
        Path.home() / ".deploynote" / "config.yaml",
    ]
    if cli_path and not Path(cli_path).exists():
        raise ConfigurationError(f"Config file not found: {cli_path}")

    raw: dict = {}
    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
            if loaded is None:
                continue
            if not isinstance(loaded, dict):
                raise ConfigurationError(f"Invalid config in {path}: expected a mapping")
            raw = _expand_env_vars(loaded)
            break

    raw = _apply_trigger_env(raw)
    try:
        return DeployNoteConfig(**raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config: {e}") from e


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def _apply_trigger_env(raw: dict) -> dict:
    """Fill unset trigger fields from the environment.

    Empty strings (an unset ``${VAR}`` reference) count as unset.
    """
    trigger = dict(raw.get("trigger") or {})
    for field, env_name in _TRIGGER_ENV.items():
        if trigger.get(field) in (None, ""):
            value = os.environ.get(env_name, "").strip()
            trigger[field] = value or None
    return {**raw, "trigger": trigger}


# Default YAML template for `deploynote config init`
DEFAULT_CONFIG_TEMPLATE = """\
# deploynote.yaml

# Generative model
llm:
  provider: "deepseek"         # deepseek | openai | anthropic
  model: "deepseek-reasoner"
  api_key_env: "DEEPSEEK_API_KEY"
  # base_url: "https://api.deepseek.com/v1"   # defaults per provider
  max_tokens: 1000
  temperature: 0.3
  timeout: 120

# Source control
vcs:
  provider: "github"
  token_env: "GITHUB_TOKEN"
  # base_url: "https://github.example.com/api/v3"

# Where deploy notes are committed on the PR branch
store:
  namespace: "dev-utils/deployNotes"
  extension: "md"
  commit_message: "Add deploy note for PR #{number}"
  author_name: "GitHub Actions"
  author_email: "actions@github.com"

# Which change request to process (defaults to $REPOSITORY / $PR_NUMBER)
trigger:
  repository: "${REPOSITORY}"
  pr_number: "${PR_NUMBER}"

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
