"""Interactive terminal front end and chat runner."""

import importlib
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markdown import Markdown
from rich.pretty import Pretty
from rich.prompt import Prompt

from nestflow.config.compiler import compile_config
from nestflow.config.loader import ConfigLoader
from nestflow.core.payloads import (
    ChoiceExpectation,
    ExpectationPayload,
    FreeTextExpectation,
    MarkdownOutput,
    OutputPayload,
    TextOutput,
)
from nestflow.demos.language_quiz import build_quiz
from nestflow.flow.manager import FlowManager
from nestflow.observability.logging import setup_logging
from nestflow.runtime.conversation import Conversation

EXIT_COMMANDS = ("quit", "exit", "q", "/quit", "/exit")


class ConsoleFrontEnd:
    """Front end that prints with rich and asks through ``Prompt``."""

    def __init__(self, console: Console):
        self.console = console
        self.pending: ExpectationPayload | None = None
        self.ended = False

    def show_output_to_user(self, payload: OutputPayload) -> None:
        if isinstance(payload, MarkdownOutput):
            self.console.print(Markdown(payload.text))
        elif isinstance(payload, TextOutput):
            self.console.print(f"[bold blue]Bot > [/]{payload.text}")

    def get_input_from_user(self, expectation: ExpectationPayload) -> None:
        self.pending = expectation

    def end_user_session(self) -> None:
        self.ended = True
        self.console.print("\n[yellow]Session over.[/]")

    def ask(self) -> str:
        """Prompt for the input described by the pending expectation."""
        expectation, self.pending = self.pending, None
        if isinstance(expectation, ChoiceExpectation):
            return Prompt.ask(
                "[bold green]You[/]", choices=expectation.options, console=self.console
            )
        label = "[bold green]You[/]"
        if isinstance(expectation, FreeTextExpectation):
            label += f" [dim](max {expectation.max_length} chars)[/]"
        return Prompt.ask(label, console=self.console)


@dataclass
class ChatConfig:
    """Configuration for chat runner."""

    config_path: Path | None = None
    module: str | None = None
    log_level: str | None = None
    log_file: str | None = None
    show_state: bool = False
    debug: bool = False


def import_handlers(module: str) -> None:
    """Import the module that registers decision functions and transforms."""
    # Ensure cwd is in python path
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    importlib.import_module(module)


class ChatRunner:
    """Interactive chat session runner.

    Builds the flow tree (bundled demo when no config path is given), wires it
    to a ``ConsoleFrontEnd`` and alternates prompts and deliveries until the
    session ends or the user quits.
    """

    def __init__(self, config: ChatConfig, console: Console | None = None):
        self.config = config
        self.console = console or Console()
        self.front_end = ConsoleFrontEnd(self.console)
        self.conversation: Conversation | None = None

    def setup(self) -> Conversation:
        """Load configuration and build the conversation.

        Raises:
            ConfigurationError: If the flow definition is invalid
        """
        show_state = self.config.show_state
        log_level = self.config.log_level or "WARNING"
        log_file = self.config.log_file

        root: FlowManager
        if self.config.config_path is None:
            root = build_quiz()
        else:
            if self.config.module:
                import_handlers(self.config.module)
            nestflow_config = ConfigLoader.load(self.config.config_path)
            settings = nestflow_config.settings
            show_state = show_state or settings.show_state
            log_file = log_file or settings.log_file
            log_level = self.config.log_level or settings.log_level
            root = compile_config(nestflow_config).build(nestflow_config.root)

        setup_logging(log_level, log_file)
        self.config.show_state = show_state
        self.conversation = Conversation(root, self.front_end)
        return self.conversation

    def start(self) -> None:
        """Run the interactive session."""
        conversation = self.conversation or self.setup()
        self.console.print("Type 'exit' or 'quit' to end session.\n", style="dim")

        conversation.start()
        while not conversation.is_finished:
            try:
                user_input = self.front_end.ask()
            except (KeyboardInterrupt, EOFError):
                self.console.print("\n[yellow]Goodbye![/]")
                break

            if self._is_exit_command(user_input):
                self.console.print("\n[yellow]Goodbye![/]")
                break

            conversation.deliver(user_input)
            if self.config.show_state:
                self._print_state(conversation.state)

    def _print_state(self, state: dict[str, Any]) -> None:
        self.console.print(Pretty(state), style="dim")

    def _is_exit_command(self, user_input: str) -> bool:
        """Check if input is an exit command."""
        return user_input.strip().lower() in EXIT_COMMANDS


def run_chat_session(config: ChatConfig) -> None:
    """Run an interactive chat session.

    Args:
        config: Chat configuration
    """
    ChatRunner(config).start()
