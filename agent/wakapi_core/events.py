"""
Host trigger events and the subscription table.

The host (editor, or the standalone Tk host) calls emit() when something
happens; handlers are subscribed per event kind.
"""

from enum import Enum

from .config import log


class Trigger(Enum):
    UPDATE = "update"
    SCRIPTS_RELOADED = "scripts_reloaded"
    PLAYMODE_CHANGED = "playmode_changed"
    PROPERTY_CONTEXT_MENU = "property_context_menu"
    HIERARCHY_CHANGED = "hierarchy_changed"
    SCENE_SAVED = "scene_saved"
    SCENE_OPENED = "scene_opened"
    SCENE_CLOSING = "scene_closing"
    SCENE_CREATED = "scene_created"


class EventHub:
    """Mapping of Trigger → handlers, called in subscription order."""

    def __init__(self):
        self._handlers = {kind: [] for kind in Trigger}

    def subscribe(self, kind, handler):
        handlers = self._handlers[kind]
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, kind, handler):
        handlers = self._handlers[kind]
        if handler in handlers:
            handlers.remove(handler)

    def handlers(self, kind):
        return list(self._handlers[kind])

    def emit(self, kind, *args):
        """Run every handler for `kind`. Handler errors are logged, never raised."""
        for handler in self.handlers(kind):
            try:
                handler(*args)
            except Exception as e:
                log.error("Handler error on %s: %s", kind.value, e, exc_info=True)
