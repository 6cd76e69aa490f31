"""
Gromozeka MapCache demo - people records in a thread-safe map cache.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import lib.utils as utils
from internal.config.manager import ConfigManager
from internal.demo import DemoReport, DemoRunner
from lib.logging_utils import initLogging

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
logger = logging.getLogger(__name__)


class MapCacheDemo:
    """Demo orchestrator: loads config, sets up logging and runs the demo."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        self.configManager = ConfigManager(configPath, configDirs)

        initLogging(self.configManager.getLoggingConfig())

        self.runner = DemoRunner(self.configManager.getDemoConfig())

    def run(self) -> DemoReport:
        """Run the demo."""
        report = self.runner.run()
        logger.info(f"Demo finished, {report.finalSize} people in the cache, dood!")
        return report


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Gromozeka MapCache demo: people records in a map cache, dood!")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times), dood!",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit, dood!",
    )
    args = parser.parse_args(argv)
    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dir_path) for dir_path in args.config_dir]

    return args


def prettyPrintConfig(configManager: ConfigManager) -> None:
    """Pretty-print the loaded configuration, dood!"""
    print("=== MapCache Demo Configuration ===")
    print()
    print(utils.jsonDumps(configManager.config, indent=2))
    print()
    print("=== Configuration loaded successfully, dood! ===")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    if args.print_config:
        prettyPrintConfig(ConfigManager(args.config, args.config_dir))
        return 0

    try:
        MapCacheDemo(configPath=args.config, configDirs=args.config_dir).run()
    except KeyboardInterrupt:
        logger.info("Demo stopped by user")
    except Exception as e:
        logger.error(f"Demo crashed: {e}")
        logger.exception(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
