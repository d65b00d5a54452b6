#!/usr/bin/env python3
"""Build a composite state from a config file and emit it as a plant state message."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from composite_state import CompositeStateError
from composite_state.config import CompositeStateConfig, build_composite
from composite_state.messages import PlantStateMessage
from composite_state.utils import configure_logging, get_logger

logger = get_logger("encode_plant_state")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to composite state config (JSON or YAML)")
    parser.add_argument("--output", type=Path, help="Write the binary message here instead of printing JSON")
    parser.add_argument("--utime", type=int, help="Override the message timestamp (microseconds)")
    parser.add_argument("--log-level", default=None, help="Logging level (defaults to LOG_LEVEL or INFO)")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(args.log_level, stream=sys.stderr)
    if not args.config.exists():
        raise SystemExit(f"Config file not found: {args.config}")
    try:
        config = CompositeStateConfig.from_file(args.config)
        vector = build_composite(config)
        utime = args.utime if args.utime is not None else config.utime
        message = PlantStateMessage.from_composite(vector, utime=utime)
    except (ValueError, CompositeStateError) as exc:
        raise SystemExit(f"Cannot build plant state from {args.config}: {exc}") from exc

    if args.output:
        payload = message.encode()
        args.output.write_bytes(payload)
        logger.info("Wrote %d bytes (%d states) to %s", len(payload), message.num_states, args.output)
    else:
        print(json.dumps(message.to_dict()))


if __name__ == "__main__":
    main()
