"""
Heartbeat API — request construction, async POST, response parsing.

post_heartbeat() never blocks: it builds the request, starts the POST on a
BackgroundRequest and hands it back for the delivery queue. The result is
read later, on the tick thread, by parse_response().
"""

import json
import base64

import requests

from .constants import CLIENT_ID
from .delivery import BackgroundRequest
from .state import HeartbeatResponse


class WakapiError(Exception):
    """Base error for the heartbeat agent."""


class DeliveryError(WakapiError):
    """A heartbeat was not recorded (transport, HTTP or server error)."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


# ─── Request ─────────────────────────────────────────────────────

def build_user_agent(heartbeat):
    return (
        f"{CLIENT_ID} ({heartbeat.operating_system}-idk) "
        f"{heartbeat.editor}/1.0.0 {heartbeat.editor}-wakatime/1.0.0"
    )


def build_headers(heartbeat, api_key):
    token = base64.b64encode(api_key.encode("utf-8")).decode("ascii")
    return {
        "Content-Type": "application/json",
        "Authorization": f"Basic {token}",
        "X-Machine-Name": heartbeat.machine,
        "User-Agent": build_user_agent(heartbeat),
    }


def build_body(heartbeat):
    """The API takes a batch; we always send a batch of one."""
    return json.dumps([heartbeat.to_dict()])


def post_heartbeat(heartbeat, settings, session):
    """Start the POST in the background. Returns the running BackgroundRequest."""
    url = settings.heartbeat_url
    body = build_body(heartbeat)
    headers = build_headers(heartbeat, settings.api_key)

    def send():
        return session.post(url, data=body.encode("utf-8"), headers=headers)

    return BackgroundRequest(send, name="wakapi-heartbeat").start()


# ─── Response ────────────────────────────────────────────────────

def parse_response(operation):
    """Turn a finished request into a HeartbeatResponse. Raises DeliveryError."""
    if operation.error is not None:
        if isinstance(operation.error, requests.RequestException):
            raise DeliveryError(f"network error: {operation.error}")
        raise DeliveryError(f"request failed: {operation.error!r}")

    resp = operation.result
    status = resp.status_code
    try:
        payload = resp.json()
    except ValueError:
        raise DeliveryError(
            f"malformed response (HTTP {status}): {resp.text[:200]}", status,
        ) from None

    if not isinstance(payload, dict):
        raise DeliveryError(f"malformed response (HTTP {status}): not an object", status)

    if payload.get("error") is not None:
        raise DeliveryError(str(payload["error"]), status)

    if not 200 <= status < 300:
        raise DeliveryError(f"HTTP {status}", status)

    try:
        return HeartbeatResponse.from_dict(payload.get("data"))
    except ValueError as e:
        raise DeliveryError(f"malformed response data: {e}", status) from None
