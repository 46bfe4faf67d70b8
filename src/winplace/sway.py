"""Sway display enumeration over the i3-ipc socket."""

from __future__ import annotations

import json
import logging
import os
import socket
import struct

from .models import Display

log = logging.getLogger(__name__)

# i3-ipc framing: magic, payload length, message type (native byte order)
_MAGIC = b"i3-ipc"
_HEADER = struct.Struct(f"={len(_MAGIC)}sII")

IPC_GET_WORKSPACES = 1
IPC_GET_OUTPUTS = 3


def _read(sock: socket.socket, size: int) -> bytes:
    buf = bytearray()
    while len(buf) < size:
        chunk = sock.recv(size - len(buf))
        if not chunk:
            raise ConnectionError("Sway closed the socket mid-reply")
        buf.extend(chunk)
    return bytes(buf)


class SwayIPC:
    """Read-only client for the socket named by ``$SWAYSOCK``."""

    name = "Sway"

    def __init__(self, timeout: float = 2.0) -> None:
        self._socket_path = os.environ.get("SWAYSOCK", "")
        self._timeout = timeout

    def _send(self, msg_type: int, payload: str = "") -> dict | list:
        """Send one message and return its decoded JSON reply."""
        log.debug("Sway request type %d via %s", msg_type, self._socket_path)
        body = payload.encode()
        try:
            with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
                sock.settimeout(self._timeout)
                sock.connect(self._socket_path)
                sock.sendall(_HEADER.pack(_MAGIC, len(body), msg_type) + body)
                magic, length, _ = _HEADER.unpack(_read(sock, _HEADER.size))
                if magic != _MAGIC:
                    raise ConnectionError(f"Unexpected reply header {magic!r}")
                return json.loads(_read(sock, length).decode())
        except (OSError, ValueError) as e:
            raise ConnectionError(f"Sway request type {msg_type} failed: {e}") from e

    def get_outputs(self) -> list[dict]:
        return self._send(IPC_GET_OUTPUTS)

    def get_workspaces(self) -> list[dict]:
        return self._send(IPC_GET_WORKSPACES)

    def get_displays(self) -> list[Display]:
        """Active outputs; each usable frame is the rect of its visible workspace."""
        workspaces = self.get_workspaces()
        return [
            Display.from_sway_output(output, workspaces)
            for output in self.get_outputs()
            if output.get("active", True) and output.get("scale", 1.0) > 0
        ]
