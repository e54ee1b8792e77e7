"""
AMBER Checkpoint v1.0 — Booth Event Feed
Pushes booth events to connected operator consoles. Every frame is stamped
with a running sequence number and the shift/subject it concerns, so a
console that reconnects mid-shift can tell stale frames from fresh ones.
"""

import json
import logging
from fastapi import WebSocket

logger = logging.getLogger("amber.web")


class ConnectionManager:
    """Open console sockets plus the booth event sequence."""

    def __init__(self):
        self.active: list[WebSocket] = []
        self.seq = 0

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.active.append(ws)

    def disconnect(self, ws: WebSocket):
        if ws in self.active:
            self.active.remove(ws)

    def frame(self, event: str, data: dict = None, booth: dict = None) -> str:
        """One event frame: {event, seq, shift, subject, data}."""
        self.seq += 1
        booth = booth or {}
        return json.dumps({
            "event": event,
            "seq": self.seq,
            "shift": booth.get("shift"),
            "subject": booth.get("subject"),
            "data": data or {},
        })

    async def send(self, ws: WebSocket, event: str, data: dict = None, booth: dict = None):
        """Frame for a single console (initial state on connect)."""
        await ws.send_text(self.frame(event, data, booth))

    async def broadcast(self, event: str, data: dict = None, booth: dict = None):
        """Same frame to every console; consoles that fail to receive are dropped."""
        message = self.frame(event, data, booth)
        stale = []
        for ws in self.active:
            try:
                await ws.send_text(message)
            except Exception:
                stale.append(ws)
        for ws in stale:
            self.disconnect(ws)
        if stale:
            logger.info(f"Dropped {len(stale)} console(s) after {event} #{self.seq}")

    @property
    def client_count(self) -> int:
        return len(self.active)
