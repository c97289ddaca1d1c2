"""
TkEditorHost — standalone stand-in for the editor.

Everything runs inside Tkinter's event loop via root.after(). Zero
busy-wait loops, and the only background threads are the short-lived
heartbeat POSTs.

  _tick()        — emits UPDATE (drives the delivery queue)   (every 50ms)
  _poll_scene()  — stats the watched scene file               (every 2s)
                   first seen → SCENE_OPENED
                   mtime moved → SCENE_SAVED
                   gone        → SCENE_CLOSING
"""

import os
import tkinter as tk

from .constants import TICK_INTERVAL_MS, SCENE_POLL_SEC
from .config import log
from .events import Trigger


class SceneWatcher:
    """Turns mtime changes of one file into scene triggers."""

    def __init__(self, path):
        self.path = os.path.abspath(path) if path else ""
        self._mtime = None

    def active_entity(self):
        return self.path if self.path and self._mtime is not None else ""

    def poll(self):
        """Returns the Trigger the latest stat implies, or None."""
        if not self.path:
            return None
        try:
            mtime = os.stat(self.path).st_mtime
        except OSError:
            mtime = None

        previous, self._mtime = self._mtime, mtime
        if previous is None and mtime is not None:
            return Trigger.SCENE_OPENED
        if previous is not None and mtime is None:
            return Trigger.SCENE_CLOSING
        if previous is not None and mtime != previous:
            return Trigger.SCENE_SAVED
        return None


class TkEditorHost:
    """
    Owns the Tk main loop. The root window is hidden (withdrawn); this
    host has no UI of its own.
    """

    def __init__(self, hub, watcher):
        self._hub = hub
        self._watcher = watcher
        self._root = None

    def run(self):
        """Blocks on Tk mainloop. Call from main thread."""
        self._root = tk.Tk()
        self._root.withdraw()

        self._root.after(TICK_INTERVAL_MS, self._tick)
        self._root.after(0, self._poll_scene)

        log.info("Editor host running (scene=%s)", self._watcher.path or "none")
        try:
            self._root.mainloop()
        finally:
            log.info("Editor host shut down.")

    def stop(self):
        try:
            self._root.quit()
        except Exception:
            pass

    # ─── Update tick (every 50ms) ────────────────────────────

    def _tick(self):
        try:
            self._hub.emit(Trigger.UPDATE)
        except Exception as e:
            log.error("_tick error: %s", e, exc_info=True)
        self._root.after(TICK_INTERVAL_MS, self._tick)

    # ─── Scene polling (every 2s) ────────────────────────────

    def _poll_scene(self):
        try:
            trigger = self._watcher.poll()
            if trigger is not None:
                log.info("Scene %s: %s", trigger.value, self._watcher.path)
                self._hub.emit(trigger)
        except Exception as e:
            log.error("_poll_scene error: %s", e, exc_info=True)
        self._root.after(SCENE_POLL_SEC * 1000, self._poll_scene)
