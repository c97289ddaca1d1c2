"""
wakapi_core — Wakapi heartbeat agent for the editor
===================================================
Architecture: host-driven ticks. Zero busy-wait, zero blocking sends.

  constants.py    → Version, buffer, wire identifiers, settings keys
  config.py       → Paths, logging, config load/save, helpers
  settings.py     → Key-value stores + WakapiSettings typed accessors
  vcs.py          → BranchResolver (git, fail-permanent)
  state.py        → HeartbeatResponse (last acknowledged heartbeat)
  heartbeat.py    → Heartbeat record, HeartbeatBuilder, throttle gate
  http_client.py  → HTTP session with pooling + CA bundle, no retries
  delivery.py     → DeliveryQueue (cooperative polling) + BackgroundRequest
  api.py          → Heartbeat POST + response parsing
  events.py       → Trigger kinds + EventHub subscription table
  client.py       → WakapiClient (triggers → heartbeats)
  app.py          → TkEditorHost (standalone host, root.after scheduling)
  runner.py       → main()
"""
