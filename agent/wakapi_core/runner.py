"""
Entry point for the standalone agent.
"""

import os
import sys
import time
import signal

from .constants import AGENT_VERSION, SHUTDOWN_DRAIN_TICKS, DEFAULT_PROJECT
from .config import log, safe_print, setup_logging, CONFIG_FILE
from .settings import JsonFileStore, WakapiSettings
from .events import EventHub
from .client import WakapiClient
from .heartbeat import resolve_scene_entity
from .app import SceneWatcher, TkEditorHost
from . import http_client


def main(argv=None):
    """python agent.py [scene_path]"""
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()
    safe_print("Wakapi editor agent v" + AGENT_VERSION)

    app_name = os.path.basename(os.getcwd()) or DEFAULT_PROJECT
    settings = WakapiSettings(JsonFileStore(CONFIG_FILE), default_project=app_name)
    if not settings.enabled:
        log.info("Wakapi is disabled. Set \"Enabled\": true in %s", CONFIG_FILE)
        return 0

    data_path = os.path.join(os.getcwd(), "Assets")
    watcher = SceneWatcher(resolve_scene_entity(argv[0] if argv else "", data_path))
    watcher.poll()  # prime so the first heartbeat carries the scene

    hub = EventHub()
    session = http_client.create_session()
    client = WakapiClient(
        settings, hub, watcher.active_entity,
        session=session, app_name=app_name,
    )
    host = TkEditorHost(hub, watcher)

    client.start()
    signal.signal(signal.SIGTERM, lambda *_: host.stop())
    try:
        host.run()
    except KeyboardInterrupt:
        log.info("Agent stopped by user (Ctrl+C)")
    finally:
        client.stop()
        left = client.queue.drain(SHUTDOWN_DRAIN_TICKS, wait=lambda: time.sleep(0.05))
        if left:
            log.warning("Exiting with %d heartbeat(s) still in flight", left)
        session.close()
    return 0
