"""
User configuration for contextpack.

Model groups live in a JSON file (by default ~/.config/contextpack.json):

    {
      "groups": {
        "default": {"models": ["openai:gpt-4o-mini"]},
        "review": {
          "models": ["anthropic:claude-3-5-sonnet-latest", "openai:gpt-4o"],
          "system_prompt": "You are a meticulous code reviewer."
        }
      }
    }

A group bundles the models to query with the system prompt sent to them. The
"default" group is used when --group is not given; when the file does not
define one it is built from DEFAULT_MODELS.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from contextpack.config import DEFAULT_CONFIG_PATH, DEFAULT_MODELS, SUPPORTED_PROVIDERS
from contextpack.errors import ConfigError
from contextpack.llm_service import ModelSpec, parse_model_list

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "default"


@dataclass
class ModelGroup:
    name: str
    models: List[str]
    system_prompt: Optional[str] = None


@dataclass
class UserConfig:
    """Model groups keyed by name, plus where they were loaded from."""

    groups: Dict[str, ModelGroup] = field(default_factory=dict)
    path: Optional[Path] = None

    def get_group(self, name: str) -> ModelGroup:
        """
        Look up a model group by name.

        Raises:
            ConfigError: If no group has that name.
        """
        group = self.groups.get(name)
        if group is None:
            available = ", ".join(sorted(self.groups)) or "(none)"
            raise ConfigError(
                f'Unknown model group "{name}"',
                [
                    f"Available groups: {available}",
                    "Run 'contextpack --list_models' to see every configured group",
                ],
            )
        return group

    def to_dict(self) -> dict:
        groups = {}
        for name, group in self.groups.items():
            entry = {"models": list(group.models)}
            if group.system_prompt:
                entry["system_prompt"] = group.system_prompt
            groups[name] = entry
        return {"groups": groups}


def _default_group() -> ModelGroup:
    models = [model.strip() for model in DEFAULT_MODELS.split(",") if model.strip()]
    return ModelGroup(name=DEFAULT_GROUP, models=models)


def default_user_config() -> UserConfig:
    return UserConfig(groups={DEFAULT_GROUP: _default_group()})


def _invalid(path: Path, detail: str) -> ConfigError:
    return ConfigError(
        f"Invalid config file {path}: {detail}",
        [
            'Groups look like {"groups": {"name": {"models": ["provider:model_id"], "system_prompt": "..."}}}',
            "Run 'contextpack --init_config --config NEW_PATH' to generate a starter file",
        ],
    )


def parse_user_config(data, path: Path) -> UserConfig:
    """
    Validate decoded JSON and build a UserConfig.

    Model entries are parsed eagerly so a typo surfaces before any model is
    queried.

    Raises:
        ConfigError: If the structure or a model specification is invalid.
    """
    if not isinstance(data, dict):
        raise _invalid(path, "top-level value must be an object")
    raw_groups = data.get("groups", {})
    if not isinstance(raw_groups, dict):
        raise _invalid(path, '"groups" must be an object')

    groups: Dict[str, ModelGroup] = {}
    for name, entry in raw_groups.items():
        if not isinstance(entry, dict):
            raise _invalid(path, f'group "{name}" must be an object')
        models = entry.get("models")
        if not isinstance(models, list) or not models or not all(isinstance(m, str) for m in models):
            raise _invalid(path, f'group "{name}" needs a non-empty "models" list of strings')
        system_prompt = entry.get("system_prompt")
        if system_prompt is not None and not isinstance(system_prompt, str):
            raise _invalid(path, f'"system_prompt" of group "{name}" must be a string')
        parse_model_list(models)
        groups[name] = ModelGroup(name=name, models=models, system_prompt=system_prompt)

    if DEFAULT_GROUP not in groups:
        groups[DEFAULT_GROUP] = _default_group()
    return UserConfig(groups=groups, path=path)


def load_user_config(config_path=None) -> UserConfig:
    """
    Load the user configuration.

    Args:
        config_path (str | Path | None): File to read. When omitted the
            default location is used and a missing file yields the built-in
            defaults; an explicitly named file must exist.

    Returns:
        UserConfig: The parsed configuration.

    Raises:
        ConfigError: If the file is missing (explicit path only), unreadable
            or malformed.
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit:
            raise ConfigError(
                f"Config file not found: {path}",
                ["Check the --config path", f"Create one with: contextpack --init_config --config {path}"],
            )
        logger.debug(f"No config file at {path}; using built-in defaults")
        return default_user_config()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise _invalid(path, f"not valid JSON ({e.msg} at line {e.lineno})") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {str(e)}") from e

    config = parse_user_config(data, path)
    logger.debug(f"Loaded {len(config.groups)} model group(s) from {path}")
    return config


def save_user_config(config: UserConfig, config_path) -> Path:
    """Write the configuration as pretty-printed JSON, creating parent directories."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
        f.write("\n")
    return path


def init_user_config(config_path=None) -> Path:
    """
    Write a starter configuration holding only the default group.

    Raises:
        ConfigError: If a file already exists at the target path.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if path.exists():
        raise ConfigError(
            f"Config file already exists: {path}",
            ["Edit the existing file, or pass --config with a new path"],
        )
    save_user_config(default_user_config(), path)
    logger.info(f"Wrote starter config to {path}")
    return path


def resolve_run_settings(
    config: UserConfig,
    group_name: Optional[str] = None,
    models: Optional[str] = None,
    system_prompt: Optional[str] = None,
) -> Tuple[List[ModelSpec], Optional[str]]:
    """
    Decide which models to query and with which system prompt.

    Explicit --models and --system_prompt values take precedence over the
    selected group's entries.

    Returns:
        Tuple[List[ModelSpec], Optional[str]]: (model specs, system prompt)
    """
    group = config.get_group(group_name or DEFAULT_GROUP)
    model_specs = parse_model_list(models if models is not None else group.models)
    if system_prompt is None:
        system_prompt = group.system_prompt
    return model_specs, system_prompt


def format_model_listing(config: UserConfig) -> str:
    """Render configured groups and their models for the console."""
    source = str(config.path) if config.path else "built-in defaults"
    lines = [f"Model groups ({source}):"]
    for name in sorted(config.groups):
        group = config.groups[name]
        lines.append(f"  {name}:")
        lines.extend(f"    - {model}" for model in group.models)
        if group.system_prompt:
            prompt = group.system_prompt.replace("\n", " ")
            if len(prompt) > 60:
                prompt = prompt[:57] + "..."
            lines.append(f"    system prompt: {prompt}")
    lines.append(f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}")
    return "\n".join(lines)
