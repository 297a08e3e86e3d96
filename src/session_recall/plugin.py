"""Host plugin glue for session recall.

The host platform owns the event loop and prompt assembly.  This module
registers a ``before_agent_start`` handler that answers with a context
block to prepend, and a service whose lifecycle is only logged.

Classes
-------
- BeforeAgentStartEvent  — payload of the turn-start event
- HookResult             — handler answer carrying the context block
- PluginService          — service descriptor with start/stop callbacks
- PluginHost             — abstract host API the plugin registers with
- SessionRecallPlugin    — the plugin itself
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from session_recall.config import RecallConfig
from session_recall.middleware.recall_middleware import RecallMiddleware
from session_recall.search.base import SearchBackend
from session_recall.search.command import CommandSearchBackend

logger = logging.getLogger(__name__)

BEFORE_AGENT_START: str = "before_agent_start"


class BeforeAgentStartEvent(BaseModel):
    """Event dispatched by the host before each agent turn."""

    model_config = ConfigDict(frozen=True)

    prompt: str | None = None


class HookResult(BaseModel):
    """Answer to ``before_agent_start``: text the host prepends to the prompt."""

    model_config = ConfigDict(frozen=True)

    prepend_context: str


EventHandler = Callable[[BeforeAgentStartEvent], "HookResult | None"]


@dataclass(frozen=True)
class PluginService:
    """A named service with lifecycle callbacks."""

    service_id: str
    start: Callable[[], None]
    stop: Callable[[], None]


class PluginHost(ABC):
    """The subset of the host API used by the plugin."""

    @property
    @abstractmethod
    def plugin_config(self) -> Mapping[str, object] | None:
        """Raw options configured for this plugin, if any."""

    @abstractmethod
    def on(self, event: str, handler: EventHandler) -> None:
        """Subscribe ``handler`` to the host event named ``event``."""

    @abstractmethod
    def register_service(self, service: PluginService) -> None:
        """Register a long-lived service with the host."""


class SessionRecallPlugin:
    """Inject context from recent sessions before each agent turn.

    Parameters
    ----------
    backend_factory:
        Builds the search backend once the configuration is known.
        Defaults to a ``CommandSearchBackend`` with default settings.
    """

    plugin_id: str = "session-recall"
    name: str = "Session Recall"
    description: str = "Injects relevant context from recent sessions before each turn"

    def __init__(
        self,
        backend_factory: Callable[[RecallConfig], SearchBackend] | None = None,
    ) -> None:
        self._backend_factory = backend_factory or (lambda _config: CommandSearchBackend())
        self.middleware: RecallMiddleware | None = None

    def register(self, host: PluginHost) -> None:
        """Validate the options and wire the plugin into ``host``.

        Raises
        ------
        ConfigurationError
            If the host options are invalid.  Nothing is registered.
        """
        config = RecallConfig.from_mapping(host.plugin_config)

        if not config.enabled:
            logger.info("session-recall: disabled by config")
            return

        self.middleware = RecallMiddleware(config, self._backend_factory(config))
        logger.info(
            "session-recall: registered (maxResults=%d, minScore=%s)",
            config.max_results,
            config.min_score,
        )

        host.on(BEFORE_AGENT_START, self.handle_before_agent_start)
        host.register_service(
            PluginService(service_id=self.plugin_id, start=self._on_start, stop=self._on_stop)
        )

    def handle_before_agent_start(self, event: BeforeAgentStartEvent) -> HookResult | None:
        """Answer a turn-start event with a context block, or None.

        Any failure is logged and results in no augmentation; the turn
        itself always proceeds.
        """
        if self.middleware is None:
            return None
        try:
            context = self.middleware.before_agent_start(event.prompt)
        except Exception as exc:  # noqa: BLE001
            logger.warning("session-recall: search failed: %s", exc)
            return None
        if context is None:
            return None
        return HookResult(prepend_context=context)

    def _on_start(self) -> None:
        logger.info("session-recall: started")

    def _on_stop(self) -> None:
        logger.info("session-recall: stopped")
