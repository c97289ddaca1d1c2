"""
Wakapi Editor Agent
===================
Sends "heartbeats" (active scene, project, git branch, timestamp) to a
Wakapi / WakaTime compatible server while you work. Saves and scene
switches go out immediately; everything else at most once per 2 minutes.

Settings live in config.json in the data directory:
    {"Enabled": true, "BaseURL": "https://wakapi.example.com", "ApiKey": "..."}

Usage:
    python agent.py [path/to/Scene.unity]
"""

import sys

from wakapi_core.runner import main


if __name__ == "__main__":
    sys.exit(main())
