# src/corecatalog/cli.py

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from corecatalog import config as config_module
from corecatalog import log_utils
from corecatalog.exceptions import CoreCatalogError
from corecatalog.generate import CoreDataGenerator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="corecatalog",
        description="Generate the catalog record for one openFPGA core from its GitHub releases",
    )
    parser.add_argument("username", help="GitHub owner of the core repository")
    parser.add_argument("repository", help="GitHub repository publishing the core")
    parser.add_argument("display_name", help="Catalog display name of the core")
    parser.add_argument(
        "--catalog",
        help="Cached catalog YAML file (overrides CATALOG_FILE from the configuration)",
    )
    parser.add_argument(
        "--work-dir",
        help="Directory archives are downloaded to and extracted in (overrides WORK_DIR)",
    )
    parser.add_argument(
        "--config-dir",
        help="Directory containing corecatalog.yaml (defaults to the user config directory)",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Write the record to this file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        help="Console log level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Also write a rotating log file to this directory",
    )
    return parser


def _write_record(record: Dict[str, Any], output: Optional[str]) -> None:
    text = json.dumps(record, indent=2, ensure_ascii=False)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        log_utils.logger.info(f"Wrote record to {output}")
    else:
        print(text)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the corecatalog command-line interface.

    Runs the generator for one core and writes the resulting record as JSON.

    Returns:
        int: 0 on success (including when no record was produced), 1 on failure.
    """
    args = build_parser().parse_args(argv)

    if args.log_level:
        log_utils.set_log_level(args.log_level)
    if args.log_dir:
        log_utils.add_file_logging(args.log_dir, args.log_level or "INFO")

    try:
        config = config_module.load_config(args.config_dir)
        if args.catalog:
            config["CATALOG_FILE"] = args.catalog
        if args.work_dir:
            config["WORK_DIR"] = args.work_dir

        generator = CoreDataGenerator(
            args.username, args.repository, args.display_name, config=config
        )
        record = generator.run()
    except CoreCatalogError as e:
        log_utils.logger.error(f"Failed to generate data for {args.repository}: {e}")
        return 1

    if record is None:
        log_utils.logger.warning(
            f"No core found in the latest releases of {args.username}/{args.repository}."
        )
        return 0

    try:
        _write_record(record, args.output)
    except OSError as e:
        log_utils.logger.error(f"Could not write record to {args.output}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
