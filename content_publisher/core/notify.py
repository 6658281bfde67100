"""User-facing notifications.

Notifications are transient messages for the person running a publish and
are kept apart from logging.
"""

from typing import List, Protocol, Tuple

SHORT = 2000
LONG = 5000


class Notifier(Protocol):
    """Fire-and-forget message sink."""

    def notify(self, message: str, duration: int = SHORT) -> None:
        ...


class ConsoleNotifier:
    """Prints notifications to the terminal."""

    def notify(self, message: str, duration: int = SHORT) -> None:
        print(message)


class MemoryNotifier:
    """Keeps notifications in a list, for embedding hosts and tests."""

    def __init__(self) -> None:
        self.notices: List[Tuple[str, int]] = []

    def notify(self, message: str, duration: int = SHORT) -> None:
        self.notices.append((message, duration))

    @property
    def messages(self) -> List[str]:
        return [message for message, _ in self.notices]
