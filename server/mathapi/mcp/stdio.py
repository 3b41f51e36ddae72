from __future__ import annotations

import logging
from typing import TextIO

from mathapi.core.context import request_scope
from mathapi.services.dispatcher import ProtocolDispatcher

logger = logging.getLogger("mathapi.mcp")


def run_stdio(stdin: TextIO, stdout: TextIO, dispatcher: ProtocolDispatcher) -> int:
    """
    Serve JSON-RPC requests line by line until ``stdin`` is exhausted.

    Each non-blank line gets exactly one response line, flushed before the
    next line is read. Returns the number of responses written.
    """

    logger.info("mcp.stdio.start")
    handled = 0
    for raw_line in stdin:
        line = raw_line.strip()
        if not line:
            continue

        with request_scope():
            response = dispatcher.handle_line(line)
            stdout.write(response.to_json() + "\n")
            stdout.flush()
        handled += 1

    logger.info("mcp.stdio.stop", extra={"handled": handled})
    return handled
