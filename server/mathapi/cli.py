from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import uvicorn

from mathapi.core.config import get_settings
from mathapi.core.logging import configure_logging
from mathapi.main import create_app
from mathapi.mcp.stdio import run_stdio
from mathapi.services.calculator import CalculatorService
from mathapi.services.dispatcher import ProtocolDispatcher

logger = logging.getLogger("mathapi.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="mcp-math",
        description="Evaluate arithmetic and LaTeX expressions over HTTP or MCP stdio.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level}).",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP API (default).")
    serve.add_argument("--host", type=str, default=settings.host, help="Interface to bind.")
    serve.add_argument("--port", type=int, default=settings.port, help="Port to listen on.")

    subparsers.add_parser("stdio", help="Serve MCP JSON-RPC requests over stdin/stdout.")

    calc = subparsers.add_parser("calc", help="Evaluate a single expression and print the result.")
    calc.add_argument("expression", type=str, help="Arithmetic or LaTeX expression.")

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "serve"
        args.host = settings.host
        args.port = settings.port
    return args


def _serve(host: str, port: int, log_level: str) -> int:
    logger.info("http.start", extra={"host": host, "port": port})
    uvicorn.run(create_app(log_level), host=host, port=port, log_config=None)
    return 0


def _calc(expression: str) -> int:
    outcome = CalculatorService.from_settings().calculate(expression)
    if outcome.is_error:
        print(outcome.error_message, file=sys.stderr)
        return 1
    print(outcome.as_number())
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "stdio":
        run_stdio(sys.stdin, sys.stdout, ProtocolDispatcher.from_settings())
        return 0
    if args.command == "calc":
        return _calc(args.expression)
    return _serve(args.host, args.port, args.log_level)


if __name__ == "__main__":
    sys.exit(main())
