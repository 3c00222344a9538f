"""
FSS Engine Demo Driver

Loads linked-account records from a JSON file into a fresh in-memory
engine and prints statistics. Nothing is written to disk.
"""

from __future__ import annotations
import argparse
import getpass
import json
import logging
import random
import sys
from typing import Any, List, Optional

from fss.config import EngineConfig, setup_logging
from fss.errors import FSSError, InvalidArgumentError
from fss.state.engine import StorageEngine

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ENGINE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fss-demo",
        description="Store linked-account records in an in-memory FSS engine",
    )
    parser.add_argument("--records", "-r", type=str, required=True,
                        help="JSON file holding a list of record objects")
    parser.add_argument("--passphrase", "-p", type=str,
                        help="Master passphrase (prompted if omitted)")
    parser.add_argument("--config", "-c", type=str, help="Path to engine config file")
    parser.add_argument("--seed", type=int, help="Seed for complexity jitter")
    parser.add_argument("--export", action="store_true", help="Print decrypted records")
    parser.add_argument("--log-level", type=str, help="Log level (overrides config)")
    return parser


def load_records(path: str) -> List[Any]:
    """
    Read the records file; a single object counts as one record.

    Raises:
        InvalidArgumentError: If the file is unreadable or not JSON
    """
    try:
        with open(path, 'r') as f:
            records = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidArgumentError("records", f"cannot read {path}: {e}") from e

    if not isinstance(records, list):
        records = [records]
    return records


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the demo driver."""
    args = build_parser().parse_args(argv)

    try:
        config = EngineConfig.load(args.config) if args.config else EngineConfig()
        if args.log_level:
            config.log.level = args.log_level
        setup_logging(config.log)

        records = load_records(args.records)

        passphrase = args.passphrase
        if passphrase is None:
            passphrase = getpass.getpass("Storage passphrase: ")

        rng = random.Random(args.seed) if args.seed is not None else None

        engine = StorageEngine(config, rng=rng)
        engine.initialize(passphrase)

        node_ids = [engine.store(record) for record in records]

        output = {
            "stored": node_ids,
            "stats": engine.stats().to_dict(),
            "reward_balance": engine.reward_balance(),
        }
        if args.export:
            output["records"] = [r.to_dict() for r in engine.export_all()]
    except FSSError as e:
        logger.error(f"Storage error: {e}")
        print(json.dumps({"error": e.to_dict()}, indent=2))
        return EXIT_ENGINE_ERROR

    print(json.dumps(output, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
