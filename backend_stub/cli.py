from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import DEFAULT_ADDRESS
from server.listener import BindError, start


def eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def command_serve(args: argparse.Namespace) -> int:
    verbose = bool(getattr(args, "verbose", False))
    configure_logging(verbose)

    # No --host/--port: the address is fixed.
    try:
        start(
            DEFAULT_ADDRESS,
            log_level="info" if verbose else "warning",
            access_log=verbose,
        )
    except BindError as e:
        eprint(f"✗ {e}")
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="backend-stub", description="Single-route HTTP server")
    p.add_argument("-V", "--version", action="version", version=f"backend-stub {__version__}")
    # Without a subcommand the server is started, same as `serve`.
    p.set_defaults(func=command_serve, verbose=False)
    sub = p.add_subparsers(dest="cmd")

    sp = sub.add_parser("serve", help=f"Serve GET / on http://{DEFAULT_ADDRESS}")
    sp.add_argument("-v", "--verbose", action="store_true", help="Verbose output (debug logs, access log)")
    sp.set_defaults(func=command_serve)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    rc = int(args.func(args))
    raise SystemExit(rc)
