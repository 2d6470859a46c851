from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List, Optional, TextIO

from pydantic import ValidationError
from yaml import YAMLError

from .log import get_logger
from .config import load_yaml, validate_config, SyslogConfig
from .emit import emit_lines
from .writer import BufferedSocketWriter

"""
CLI entrypoint

Usage:
  syslogstream [-c config.yaml] [--host H] [--port P] [--tag T]
               [--facility F] [--severity S] [MESSAGE ...]

Behavior:
  - Loads config (optional) and applies flag overrides, then validates
  - Sends MESSAGE as one message, or each stdin line as one message
  - All diagnostics/logs go to STDERR
"""

_LOG = get_logger(__name__)


# This function builds the parser for the CLI.
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="syslogstream", description="Send messages to a syslog receiver over TCP"
    )
    p.add_argument("-c", "--config", help="Path to YAML config")
    p.add_argument("--host", help="Receiver host name or address")
    p.add_argument("--port", type=int, help="Receiver TCP port (default: 514)")
    p.add_argument("-t", "--tag", help="Tag prepended to each message")
    p.add_argument("-f", "--facility", help="Facility name or code (default: user)")
    p.add_argument("-s", "--severity", help="Severity name or code (default: info)")
    p.add_argument("--timeout", type=float, help="Socket timeout in seconds")
    p.add_argument(
        "message",
        nargs="*",
        help="Message to send; reads one message per line from stdin if omitted",
    )
    return p


# This function merges the config file (if any) with the flags that were given.
def _raw_config(args: argparse.Namespace) -> Dict[str, Any]:
    raw: Dict[str, Any] = load_yaml(args.config) if args.config else {}
    for key in ("host", "port", "tag", "facility", "severity", "timeout"):
        value = getattr(args, key)
        if value is not None:
            raw[key] = value
    return raw


# This function is the main function for the CLI.
def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg: SyslogConfig = validate_config(_raw_config(args))
    except FileNotFoundError:
        _LOG.error("Config file not found: %s", args.config)
        return 1
    except YAMLError as e:
        _LOG.error("Failed to parse YAML config (%s): %s", args.config, e)
        return 1
    except ValidationError as e:
        _LOG.error("Config validation error: %s", e)
        return 1
    except Exception as e:
        _LOG.exception("Unexpected error loading config: %s", e)
        return 1

    lines = [" ".join(args.message)] if args.message else (stdin or sys.stdin)

    try:
        with BufferedSocketWriter(cfg.host, cfg.port, timeout=cfg.timeout) as writer:
            emit_lines(
                writer,
                lines,
                facility=cfg.facility,
                severity=cfg.severity,
                hostname=cfg.hostname,
                tag=cfg.tag,
            )
        return 0
    except KeyboardInterrupt:
        _LOG.info("Interrupted, exiting.")
        return 130
    except OSError as e:
        _LOG.error("Failed to send to %s:%s: %s", cfg.host, cfg.port, e)
        return 1
    except Exception as e:
        _LOG.exception("Unexpected runtime error: %s", e)
        return 1


# Run the main function for the CLI.
if __name__ == "__main__":
    raise SystemExit(main())
