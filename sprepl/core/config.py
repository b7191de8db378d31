"""Configuration loading with Pydantic validation and env var substitution."""

import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator


class ConfigError(ValueError):
    """Raised when a config file cannot be loaded or validated."""


def _default_styles() -> dict[str, str]:
    return {
        "keyword": "#ee00ee",
        "operator": "#aa6666",
        "number": "#2aacb8",
        "string": "#6aab73",
        "error": "bg:#ff8888 #000000",
        "comment": "#0000dd",
        "prompt": "#004400",
        "prompt_second_line_prefix": "#004400",
        # prompt_toolkit completion menu classes
        "completion-menu.completion.current": "bg:#dddddd #000000",
        "completion-menu.completion": "bg:#888888 #ffff88",
        "scrollbar.button": "bg:#000000",
        "scrollbar.background": "bg:#aaaaaa",
    }


class ReplConfig(BaseModel):
    """Settings for the interactive REPL."""
    program: str = "<stdin>"  # Program id used in diagnostics and tracebacks
    prompt_template: str = "In [{count}]: "
    auto_indent: bool = True
    indent: str = "    "
    complete_while_typing: bool = False
    confirm_exit: bool = True  # Ask before leaving on Ctrl-D
    styles: dict[str, str] = Field(default_factory=_default_styles)

    @field_validator("prompt_template")
    @classmethod
    def check_prompt_template(cls, value: str) -> str:
        """The template may only refer to the {count} placeholder."""
        try:
            value.format(count=1)
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"invalid prompt_template {value!r}: {e!r}") from e
        return value

    def format_prompt(self, count: int) -> str:
        """Render the prompt label for the given input counter."""
        return self.prompt_template.format(count=count)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ReplConfig":
        """
        Load config from YAML file with env var substitution.

        Args:
            path: Path to the config YAML file

        Returns:
            Validated ReplConfig. Styles given in the file are merged over
            the defaults rather than replacing them.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            raw_content = f.read()

        # Substitute environment variables: ${VAR_NAME}
        substituted = _substitute_env_vars(raw_content)

        try:
            data = yaml.safe_load(substituted) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping: {path}")

        styles = data.pop("styles", None) or {}
        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(str(e)) from e

        if styles:
            merged = dict(config.styles)
            merged.update({str(k): str(v) for k, v in styles.items()})
            config = config.model_copy(update={"styles": merged})

        return config


def _substitute_env_vars(content: str) -> str:
    """Replace ${VAR_NAME} with environment variable values."""
    pattern = re.compile(r'\$\{([^}]+)\}')

    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(f"Environment variable not set: {var_name}")
        return value

    return pattern.sub(replacer, content)
