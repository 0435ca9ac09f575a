"""Interactive alert and prompt utilities for the taskcal CLI."""

import abc
import builtins
import logging
import sys
from typing import Callable, Optional


def is_interactive() -> bool:
    """Return True when prompts can safely read from stdin."""
    # If input() has been monkeypatched (e.g. during tests), assume interactivity.
    if input is not builtins.input:  # type: ignore[name-defined]
        return True

    stdin = getattr(sys, "stdin", None)
    if stdin is None:
        return False

    try:
        return stdin.isatty()
    except (AttributeError, ValueError):
        return False


class Alerter(abc.ABC):
    """User-facing alert primitive.

    ``alert`` shows a message with a single dismiss action. ``offer_settings``
    shows a message with "Not now" and "Open settings" actions and calls
    ``on_open`` only when the user picks the latter.
    """

    @abc.abstractmethod
    def alert(self, title: str, message: str) -> None:
        """Show a message with a single dismiss action."""

    @abc.abstractmethod
    def offer_settings(self, title: str, message: str,
                       on_open: Optional[Callable[[], None]] = None) -> None:
        """Show a message offering to open the system settings."""


class ConsoleAlerter(Alerter):
    """Print alerts to stdout and prompt only when stdin is a terminal."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def alert(self, title: str, message: str) -> None:
        print(f"\n⚠️  {title}: {message}")

    def offer_settings(self, title: str, message: str,
                       on_open: Optional[Callable[[], None]] = None) -> None:
        print(f"\n🔒 {title}")
        print(f"   {message}")

        if on_open is None or not is_interactive():
            print("   Grant access in System Settings, then try again.")
            return

        try:
            answer = input("   Open settings now? [y/N]: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            return

        if answer in ("y", "yes"):
            try:
                on_open()
            except Exception as exc:
                self.logger.warning(f"Could not open settings: {exc}")
