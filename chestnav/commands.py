"""Host command channel for chestnav.

The host (window, menu, OS integration) sends zero-argument commands to the
active view. Each window owns one CommandChannel; a view subscribes for its
own lifetime and closes its subscriptions when it goes away, so no handler
outlives the view it belongs to.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List

from loguru import logger

Handler = Callable[[], None]


class HostCommand(Enum):
    """Commands the host can send to a view."""

    FOCUS_SEARCH = "focus-search"
    NAVIGATE_BACK = "navigate-back"
    NAVIGATE_FORWARD = "navigate-forward"
    WINDOW_ACTIVE = "window-active"
    WINDOW_INACTIVE = "window-inactive"
    THEME_UPDATED = "theme-updated"

    @classmethod
    def from_string(cls, value: str) -> "HostCommand":
        """Convert a command name to a HostCommand.

        Raises:
            ValueError: If the name is not a known command
        """
        return cls(value)


@dataclass(eq=False)
class Subscription:
    """Handle returned by CommandChannel.subscribe."""

    channel: "CommandChannel"
    command: HostCommand
    handler: Handler
    active: bool = field(default=True)

    def close(self) -> None:
        """Stop receiving the command. Closing twice is a no-op."""
        if self.active:
            self.channel._remove(self)
            self.active = False


class CommandChannel:
    """Per-window channel delivering host commands to subscribed handlers.

    Usage:
        channel = CommandChannel()
        sub = channel.subscribe(HostCommand.FOCUS_SEARCH, view.focus_search)
        channel.publish(HostCommand.FOCUS_SEARCH)
        sub.close()
    """

    def __init__(self) -> None:
        self._subscribers: Dict[HostCommand, List[Subscription]] = {}

    def subscribe(self, command: HostCommand, handler: Handler) -> Subscription:
        """Register a handler for one command.

        Args:
            command: Command to listen for
            handler: Zero-argument callable run on every publish

        Returns:
            Subscription to close when the subscribing view goes away
        """
        subscription = Subscription(self, command, handler)
        self._subscribers.setdefault(command, []).append(subscription)
        return subscription

    def publish(self, command: HostCommand) -> int:
        """Deliver a command to every current subscriber.

        Handler errors propagate to the publisher; the remaining handlers
        are not run.

        Returns:
            Number of handlers invoked
        """
        subscriptions = list(self._subscribers.get(command, []))
        if not subscriptions:
            logger.debug(f"No subscribers for host command {command.value}")
        for subscription in subscriptions:
            subscription.handler()
        return len(subscriptions)

    def subscriber_count(self, command: HostCommand) -> int:
        return len(self._subscribers.get(command, []))

    def _remove(self, subscription: Subscription) -> None:
        subscriptions = self._subscribers.get(subscription.command, [])
        if subscription in subscriptions:
            subscriptions.remove(subscription)
