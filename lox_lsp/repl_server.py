from __future__ import annotations

"""
Simple TCP REPL server for Lox.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "print 1 + 2;"}
- Response: {"ok": true, "output": ["3"], "errors": []}
        or  {"ok": false, "output": [...], "errors": ["[line 1] Error at ...", ...]}

Every connection gets its own Lox session, so definitions persist across
requests on one connection and no interpreter state is shared between the
client threads.
"""

import json
import logging
import socket
import threading
from io import StringIO
from typing import Any, Tuple

from lox.config import get_repl_address
from lox.session import Lox

logger = logging.getLogger(__name__)


class ReplSession:
    """A Lox session whose printed output and errors are captured per request."""

    def __init__(self):
        self.output: list[str] = []
        self.lox = Lox(output=self.output.append, error_stream=StringIO())

    def eval(self, code: str) -> dict[str, Any]:
        self.output.clear()
        reporter = self.lox.reporter
        reporter.had_runtime_error = False
        self.lox.run(code)
        errors = [str(d) for d in reporter.diagnostics]
        ok = not reporter.had_error and not reporter.had_runtime_error
        # Same policy as the interactive prompt: one bad request doesn't poison the session.
        reporter.reset()
        return {"ok": ok, "output": list(self.output), "errors": errors}


def handle_request(session: ReplSession, line: bytes) -> dict[str, Any]:
    try:
        req = json.loads(line.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as ex:
        return {"ok": False, "output": [], "errors": [f"Invalid request: {ex}"]}
    if not isinstance(req, dict) or req.get("cmd") != "eval":
        cmd = req.get("cmd") if isinstance(req, dict) else None
        return {"ok": False, "output": [], "errors": [f"Unknown cmd: {cmd}"]}
    return session.eval(str(req.get("code", "")))


class ReplServer:
    def __init__(self, host: str | None = None, port: int | None = None):
        default_host, default_port = get_repl_address()
        self.host = host or default_host
        self.port = port if port is not None else default_port

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("lox REPL server listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.info("client connected: %s:%d", *addr)
        session = ReplSession()
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = handle_request(session, line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))
        logger.info("client disconnected: %s:%d", *addr)


def main() -> None:
    from lox.config import get_log_level

    logging.basicConfig(level=get_log_level())
    ReplServer().serve_forever()


if __name__ == "__main__":
    main()
