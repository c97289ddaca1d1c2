"""
WakapiClient — ties host triggers to heartbeats.

  trigger → build candidate → throttle gate → POST (background)
          → delivery queue polls on UPDATE → completion handler
          → last_heartbeat updated (success) or error logged

last_heartbeat is written in _on_heartbeat_response only, which runs on
the tick thread. Everything else just reads it.
"""

from .config import log
from .delivery import DeliveryQueue
from .events import Trigger
from .heartbeat import HeartbeatBuilder, should_send
from .state import NEVER_SENT
from .vcs import BranchResolver
from . import api

# Throttled triggers (scene saved is wired separately as a forced heartbeat).
_ACTIVITY_TRIGGERS = (
    Trigger.PLAYMODE_CHANGED,
    Trigger.PROPERTY_CONTEXT_MENU,
    Trigger.HIERARCHY_CHANGED,
    Trigger.SCENE_OPENED,
    Trigger.SCENE_CLOSING,
    Trigger.SCENE_CREATED,
)


class WakapiClient:
    def __init__(self, settings, hub, active_entity, session=None,
                 builder=None, queue=None, sender=None, app_name=None):
        """
        active_entity: callable returning the absolute path of the active
        scene, or ""/None when nothing saved is open.
        sender: (heartbeat, settings, session) -> operation; defaults to
        api.post_heartbeat.
        """
        self.settings = settings
        self.hub = hub
        self.queue = queue if queue is not None else DeliveryQueue()
        self.builder = builder if builder is not None else HeartbeatBuilder(
            settings, BranchResolver(settings),
        )
        self.last_heartbeat = NEVER_SENT
        self._active_entity = active_entity
        self._session = session
        self._sender = sender or api.post_heartbeat
        self._app_name = app_name
        self._started = False

    # ─── Lifecycle ───────────────────────────────────────────

    def start(self):
        """Initial heartbeat + callback wiring. No-op when disabled."""
        if not self.settings.enabled:
            log.info("Wakapi disabled — not linking editor callbacks")
            return False

        if self._app_name:
            self.settings.active_project = self._app_name

        self.post_heartbeat()
        self.hub.subscribe(Trigger.UPDATE, self.on_update)
        self.hub.subscribe(Trigger.SCRIPTS_RELOADED, self.on_scripts_reloaded)
        self.link_callbacks()
        self._started = True
        log.info("Wakapi started (project=%s)", self.settings.active_project)
        return True

    def stop(self):
        self.hub.unsubscribe(Trigger.UPDATE, self.on_update)
        self.hub.unsubscribe(Trigger.SCRIPTS_RELOADED, self.on_scripts_reloaded)
        self._unlink_callbacks()
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def link_callbacks(self, clean=False):
        """Subscribe heartbeat handlers. clean=True unlinks old ones first."""
        if clean:
            self._unlink_callbacks()
        for kind in _ACTIVITY_TRIGGERS:
            self.hub.subscribe(kind, self.on_activity)
        self.hub.subscribe(Trigger.SCENE_SAVED, self.on_scene_saved)

    def _unlink_callbacks(self):
        for kind in _ACTIVITY_TRIGGERS:
            self.hub.unsubscribe(kind, self.on_activity)
        self.hub.unsubscribe(Trigger.SCENE_SAVED, self.on_scene_saved)

    # ─── Event handlers (payloads are not needed) ────────────

    def on_update(self, *_):
        self.queue.tick()

    def on_scripts_reloaded(self, *_):
        self.post_heartbeat()
        self.link_callbacks(clean=True)

    def on_activity(self, *_):
        self.post_heartbeat()

    def on_scene_saved(self, *_):
        self.post_heartbeat(from_save=True)

    # ─── Heartbeats ──────────────────────────────────────────

    def post_heartbeat(self, from_save=False):
        """Build, throttle and queue a heartbeat. Returns True if one was queued."""
        if not self.settings.enabled:
            return False

        heartbeat = self.builder.build(self._active_entity() or "", from_save)
        if not should_send(heartbeat, self.last_heartbeat, forced=from_save):
            return False

        operation = self._sender(heartbeat, self.settings, self._session)
        self.queue.enqueue(operation, self._on_heartbeat_response)
        return True

    def _on_heartbeat_response(self, operation):
        try:
            response = api.parse_response(operation)
        except api.DeliveryError as e:
            log.error(
                "Failed to send heartbeat to Wakapi. If this continues there is "
                "something wrong with your API key, URL or the server is offline.\n%s", e,
            )
            return
        self.last_heartbeat = response
        log.debug("Heartbeat OK | entity=%s | time=%d", response.entity, response.time)
