"""
Constants, thresholds, wire identifiers and settings keys.
"""

AGENT_VERSION = "0.1.0"

# ─── Thresholds ──────────────────────────────────────────────────
HEARTBEAT_BUFFER_SEC = 120     # Same entity, not a save → at most 1 heartbeat / 2 min
TICK_INTERVAL_MS = 50          # Host update tick (drives the delivery queue)
SCENE_POLL_SEC = 2             # How often the standalone host stats the scene file
SHUTDOWN_DRAIN_TICKS = 200     # Ticks spent flushing in-flight requests on exit

# ─── Heartbeat fields ────────────────────────────────────────────
UNSAVED_ENTITY = "Unsaved Scene"
ENTITY_TYPE = "app"
LANGUAGE = "Unity"
EDITOR_NAME = "Unity"
FALLBACK_BRANCH = "master"
ASSETS_PREFIX = "Assets/"

# Checked in order against the start of the host OS name.
OS_FAMILIES = (
    ("Windows", "Windows"),
    ("Linux", "Linux"),
    ("macOS", "MacOSX"),
    ("Darwin", "MacOSX"),
    ("Mac OS X", "MacOSX"),
)
OS_FAMILY_OTHER = "Other"

# ─── Network ─────────────────────────────────────────────────────
HEARTBEAT_PATH = "/api/heartbeat"
CLIENT_ID = "wakatime/1.0.0"

# ─── Settings keys (name → default) ──────────────────────────────
KEY_ENABLED = "Enabled"
KEY_VERSION_CONTROL = "EnableVersionControl"
KEY_API_KEY = "ApiKey"
KEY_BASE_URL = "BaseURL"
KEY_ACTIVE_PROJECT = "ActiveProject"

DEFAULT_PROJECT = "UnityProject"
