"""Hyprland display enumeration over the command socket."""

from __future__ import annotations

import json
import logging
import socket
from pathlib import Path

from .models import Display
from .utils import hyprland_runtime_dir

log = logging.getLogger(__name__)


class HyprlandIPC:
    """Read-only client for Hyprland's ``.socket.sock`` request socket."""

    name = "Hyprland"

    def __init__(self, timeout: float = 2.0) -> None:
        self._runtime = hyprland_runtime_dir()
        self._timeout = timeout

    @property
    def command_socket(self) -> Path:
        return self._runtime / ".socket.sock"

    def _request(self, payload: bytes) -> bytes:
        # Hyprland answers once and closes the connection
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.settimeout(self._timeout)
            sock.connect(str(self.command_socket))
            sock.sendall(payload)
            reply = bytearray()
            while True:
                chunk = sock.recv(8192)
                if not chunk:
                    break
                reply.extend(chunk)
        return bytes(reply)

    def command_json(self, cmd: str) -> list | dict:
        """Run ``hyprctl -j <cmd>`` over the socket and parse the reply."""
        log.debug("Hyprland request %s via %s", cmd, self.command_socket)
        try:
            raw = self._request(f"j/{cmd}".encode())
            return json.loads(raw.decode(errors="replace"))
        except (OSError, ValueError) as e:
            raise ConnectionError(f"Hyprland request {cmd!r} failed: {e}") from e

    def get_displays(self) -> list[Display]:
        """Enabled monitors, in logical coordinates."""
        return [
            Display.from_hyprctl(monitor)
            for monitor in self.command_json("monitors")
            if not monitor.get("disabled", False)
        ]
