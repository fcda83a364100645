#!/usr/bin/env python3
"""CLI entry point for gfs-bootstrap.

Usage: gfs-bootstrap [operation]

With no operation, prints the available operations and the resolved
configuration. Configuration is always resolved and validated first; a
failed validation reports every problem and returns 1.

Environment:
- PROJECT_NAME, CLUSTER_NAME, ZONE, CLUSTER_VERSION, NODE_COUNT,
  MACHINE_TYPE, DOCKER_REGISTRY, DOCKER_IMAGE_NAME, DOCKER_IMAGE_VERSION:
  override gfs-bootstrap.yaml
- GFS_BOOTSTRAP_CONFIG: path to the config source file
- GFS_MANIFEST_DIR: manifest output directory
- DEBUG: trace every external command
"""

import logging
import os
import sys
from dataclasses import fields
from importlib.metadata import PackageNotFoundError, version
from typing import Optional

from config import ConfigError, ResolvedConfig, ValidationError
from config_resolver import resolve_config
from operations import Orchestrator, get_operation, list_operations
from validation import format_errors

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def get_version():
    """Installed package version, or 'dev' when running from a checkout."""
    try:
        return version('gfs-bootstrap')
    except PackageNotFoundError:
        return 'dev'


def debug_enabled(environ=None) -> bool:
    """True if the DEBUG toggle is set to anything but 0/false/no."""
    value = (environ if environ is not None else os.environ).get('DEBUG', '')
    return value.strip().lower() not in ('', '0', 'false', 'no')


def print_usage(config: Optional[ResolvedConfig] = None):
    """Print operations and, when available, the resolved configuration."""
    print(f"gfs-bootstrap {get_version()}")
    print()
    print("Usage: gfs-bootstrap [operation]")
    print()
    print("Operations:")
    for name in list_operations():
        print(f"  {name:<26} {get_operation(name).description}")

    if config is None:
        return

    print()
    print("Configuration:")
    for f in fields(config):
        print(f"  {f.name:<22} {getattr(config, f.name)}")


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point. Returns an exit code; never exits the process."""
    if argv is None:
        argv = sys.argv[1:]

    if debug_enabled():
        logging.getLogger().setLevel(logging.DEBUG)

    if len(argv) > 1:
        print(f"Error: expected at most one operation, got: {' '.join(argv)}")
        print_usage()
        return 1

    # Resolve configuration before anything else
    try:
        config = resolve_config()
    except ValidationError as e:
        print(format_errors(e.errors))
        return 1
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    if not argv:
        print_usage(config)
        return 0

    try:
        operation = get_operation(argv[0])
    except ValueError:
        print(f"Error: Unknown operation '{argv[0]}'")
        print_usage()
        return 1

    success = Orchestrator(operation, config).run()
    return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
