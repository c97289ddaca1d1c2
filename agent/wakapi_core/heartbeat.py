"""
Heartbeat record, builder, and the throttle gate.
"""

import os
import time
import platform
from dataclasses import dataclass, asdict
from typing import Optional

from .constants import (
    HEARTBEAT_BUFFER_SEC, UNSAVED_ENTITY, ENTITY_TYPE, LANGUAGE, EDITOR_NAME,
    ASSETS_PREFIX, OS_FAMILIES, OS_FAMILY_OTHER,
)


@dataclass(frozen=True)
class Heartbeat:
    entity: str
    type: str
    category: Optional[str]
    project: str
    branch: str
    language: str
    is_write: bool
    editor: str
    operating_system: str
    machine: str
    time: int

    def to_dict(self):
        """Wire object — field names are sent as-is."""
        return asdict(self)


# ─── Identity helpers ────────────────────────────────────────────

def detect_os_family(os_name):
    """Map a host OS name ("Windows-10-...", "macOS-14.2-arm64") to its family."""
    os_name = os_name or ""
    for prefix, family in OS_FAMILIES:
        if os_name.startswith(prefix):
            return family
    return OS_FAMILY_OTHER


def resolve_scene_entity(scene_path, data_path):
    """
    Turn a host scene path into an absolute file path.

    Scene paths come in relative to the project ("Assets/Scenes/Main.unity")
    while data_path is the project's absolute Assets folder. Empty stays
    empty so the builder can substitute the unsaved placeholder.
    """
    if not scene_path:
        return ""
    if os.path.isabs(scene_path):
        return scene_path
    normalized = scene_path.replace("\\", "/")
    if normalized.startswith(ASSETS_PREFIX):
        return os.path.join(data_path, normalized[len(ASSETS_PREFIX):])
    return os.path.join(os.path.dirname(os.path.normpath(data_path)), normalized)


# ─── Builder ─────────────────────────────────────────────────────

class HeartbeatBuilder:
    """
    Builds heartbeats from the current activity context.

    Reads the clock, the active project and the branch. The branch
    resolver is the only collaborator with side effects (it may switch
    version control off).
    """

    def __init__(self, settings, branch_resolver, clock=time.time,
                 os_name=None, machine=None):
        self._settings = settings
        self._branches = branch_resolver
        self._clock = clock
        self._os_family = detect_os_family(os_name if os_name is not None else platform.platform())
        self._machine = machine if machine is not None else platform.node()
        self._last_time = 0

    def _now(self):
        # Wall clock, but never earlier than the previous heartbeat.
        now = max(int(self._clock()), self._last_time)
        self._last_time = now
        return now

    def build(self, active_path, is_save=False) -> Heartbeat:
        return Heartbeat(
            entity=active_path or UNSAVED_ENTITY,
            type=ENTITY_TYPE,
            category=None,
            project=self._settings.active_project,
            branch=self._branches.current_branch(),
            language=LANGUAGE,
            is_write=bool(is_save),
            editor=EDITOR_NAME,
            operating_system=self._os_family,
            machine=self._machine,
            time=self._now(),
        )


# ─── Throttle gate ───────────────────────────────────────────────

def should_send(candidate, last, forced=False, buffer_sec=HEARTBEAT_BUFFER_SEC):
    """Saves always go out; otherwise only after the buffer or on an entity switch."""
    if forced:
        return True
    if candidate.time - last.time >= buffer_sec:
        return True
    return candidate.entity != last.entity
