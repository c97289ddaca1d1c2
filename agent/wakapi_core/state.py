"""
HeartbeatResponse — the last heartbeat the server acknowledged.

This is the only piece of mutable state the throttle looks at. The client
replaces it from the delivery completion handler (tick thread) and nowhere
else; building or dropping a heartbeat never touches it.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class HeartbeatResponse:
    id: str = ""
    entity: str = ""
    type: str = ""
    time: int = 0

    @classmethod
    def from_dict(cls, data):
        """Validate the `data` object of a heartbeat response. Raises ValueError."""
        if not isinstance(data, dict):
            raise ValueError("response data is not an object")
        if "entity" not in data or "time" not in data:
            raise ValueError("response data is missing entity/time")
        time_value = data["time"]
        if isinstance(time_value, bool) or not isinstance(time_value, (int, float)):
            raise ValueError(f"response time is not a number: {time_value!r}")
        if not math.isfinite(time_value):
            raise ValueError(f"response time is not finite: {time_value!r}")
        return cls(
            id=str(data.get("id") or ""),
            entity=str(data["entity"] or ""),
            type=str(data.get("type") or ""),
            time=int(time_value),
        )


# Zero value: time 0 so the very first heartbeat always passes the buffer.
NEVER_SENT = HeartbeatResponse()
