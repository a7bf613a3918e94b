"""
config.py - Runtime configuration from the environment (.env supported).

    MODEL_ID               model name          (claude-3-7-sonnet-latest)
    ANTHROPIC_BASE_URL     API endpoint        (SDK default)
    MAX_TOKENS             per response        (1024)
    MAX_AUTONOMOUS_TURNS   model calls per user input, 0 = unlimited (50)
    AGENT_WORKDIR          root for file tools (cwd)
    DEBUG_LOG              dump API traffic    (false)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

DEFAULT_MODEL = "claude-3-7-sonnet-latest"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_MAX_AUTONOMOUS_TURNS = 50


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        parsed = int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
    if parsed < 0:
        raise ConfigError(f"{name} must not be negative, got {parsed}")
    return parsed


def _bool_env(name: str) -> bool:
    return os.getenv(name, "false").lower() == "true"


@dataclass
class AgentConfig:
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    workdir: Path = field(default_factory=Path.cwd)
    max_autonomous_turns: Optional[int] = DEFAULT_MAX_AUTONOMOUS_TURNS
    debug_log: bool = False
    system_prompt: str = ""

    @classmethod
    def from_env(cls) -> "AgentConfig":
        load_dotenv(find_dotenv(usecwd=True), override=True)

        workdir = Path(os.getenv("AGENT_WORKDIR") or Path.cwd()).resolve()
        if not workdir.is_dir():
            raise ConfigError(f"AGENT_WORKDIR is not a directory: {workdir}")

        max_turns = _int_env("MAX_AUTONOMOUS_TURNS", DEFAULT_MAX_AUTONOMOUS_TURNS)
        return cls(
            model=os.getenv("MODEL_ID", DEFAULT_MODEL),
            base_url=os.getenv("ANTHROPIC_BASE_URL") or None,
            max_tokens=_int_env("MAX_TOKENS", DEFAULT_MAX_TOKENS) or DEFAULT_MAX_TOKENS,
            workdir=workdir,
            max_autonomous_turns=max_turns or None,
            debug_log=_bool_env("DEBUG_LOG"),
            system_prompt=default_system_prompt(workdir),
        )


def default_system_prompt(workdir: Path) -> str:
    return f"""You are a coding agent at {workdir}.

Use read_file, list_files and edit_file to inspect and change files.
Paths are relative to the working directory.
Prefer tools over prose. After finishing, summarize what changed."""
