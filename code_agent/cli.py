"""
cli.py - Interactive entry point.

Usage:
    code-agent [--model MODEL] [--workdir DIR] [--max-turns N] [--debug]
    python -m code_agent
"""

import argparse
import sys
from pathlib import Path

from anthropic import Anthropic

from .agent import Agent
from .config import AgentConfig, default_system_prompt
from .console import ConsoleInput, ConsoleOutput
from .debug import set_debug
from .errors import ConfigError, TransportError
from .file_tools import build_file_tools
from .tools import ToolRegistry
from .transport import AnthropicTransport


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="code-agent",
        description="Chat with Claude and let it read, list and edit local files.",
    )
    parser.add_argument("--model", help="model id (env: MODEL_ID)")
    parser.add_argument("--workdir", type=Path, help="root for file tools (env: AGENT_WORKDIR)")
    parser.add_argument("--max-turns", type=int,
                        help="max model calls per user input, 0 = unlimited (env: MAX_AUTONOMOUS_TURNS)")
    parser.add_argument("--debug", action="store_true", help="print API traffic (env: DEBUG_LOG)")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> AgentConfig:
    config = AgentConfig.from_env()
    if args.model:
        config.model = args.model
    if args.workdir:
        workdir = args.workdir.resolve()
        if not workdir.is_dir():
            raise ConfigError(f"--workdir is not a directory: {workdir}")
        config.workdir = workdir
        config.system_prompt = default_system_prompt(workdir)
    if args.max_turns is not None:
        if args.max_turns < 0:
            raise ConfigError("--max-turns must not be negative")
        config.max_autonomous_turns = args.max_turns or None
    if args.debug:
        config.debug_log = True
    return config


def build_agent(config: AgentConfig, client: Anthropic) -> Agent:
    registry = ToolRegistry(build_file_tools(config.workdir))
    transport = AnthropicTransport(
        client,
        model=config.model,
        max_tokens=config.max_tokens,
        system_prompt=config.system_prompt,
    )
    return Agent(
        transport,
        registry,
        ConsoleInput(),
        ConsoleOutput(),
        max_autonomous_turns=config.max_autonomous_turns,
    )


def main(argv=None) -> int:
    try:
        config = load_config(parse_args(argv))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    set_debug(config.debug_log)
    agent = build_agent(config, Anthropic(base_url=config.base_url))

    print(f"Code Agent - {config.workdir}")
    print(f"Model: {config.model}")
    print(f"Session: {agent.session_id[:8]}...")
    print(f"Registered tools: {', '.join(agent.registry.names())}")
    print("Type 'exit' or press Ctrl-D to quit.\n")

    try:
        agent.run()
    except TransportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
