"""Bootstrap configuration management.

Configuration comes from three layers, highest priority first:
1. Environment variables (PROJECT_NAME, NODE_COUNT, DOCKER_IMAGE_NAME, ...)
2. Config source file (gfs-bootstrap.yaml, lower-case keys)
3. Built-in defaults

Config source discovery:
1. $GFS_BOOTSTRAP_CONFIG (must exist)
2. ./gfs-bootstrap.yaml (optional)

The manifest output directory is resolved the same way, from
$GFS_MANIFEST_DIR, then manifest_dir in the config source.

Resolution into a ResolvedConfig happens in config_resolver.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = 'gfs-bootstrap.yaml'
DEFAULT_MANIFEST_DIRNAME = 'generated-manifests'

# Keys accepted in the config source file
KNOWN_FIELDS = {
    'project_name',
    'cluster_name',
    'zone',
    'cluster_version',
    'node_count',
    'machine_type',
    'docker_registry',
    'docker_image_name',
    'docker_image_version',
    'disk_filter',
    'docker_context',
    'cluster_script',
    'manifest_dir',
}


class ConfigError(Exception):
    """Configuration error."""


class ValidationError(ConfigError):
    """Configuration failed validation.

    Carries every failure reason so callers can report them all at once.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors) or 'validation failed')


@dataclass(frozen=True)
class ResolvedConfig:
    """Fully resolved bootstrap configuration.

    Built once per invocation by resolve_config() and passed to every
    operation. Never mutated.
    """
    project_name: str
    cluster_name: str
    zone: str
    job_image: str
    cluster_version: str = ''
    node_count: int = 3
    machine_type: str = 'n1-standard-1'
    docker_registry: str = ''
    docker_image_name: str = 'glusterfs-heketi-bootstrap'
    docker_image_version: str = '0.0.1'
    disk_filter: str = 'description~gfs-k8s-brick'
    docker_context: str = '.'
    cluster_script: str = ''
    manifest_dir: str = DEFAULT_MANIFEST_DIRNAME

    @property
    def image_tag(self) -> str:
        """Registry tag used for docker build/push."""
        return f"{self.docker_registry}/{self.docker_image_name}:{self.docker_image_version}"

    def as_env(self) -> dict[str, str]:
        """Export config as environment variables (for external provisioners)."""
        return {
            'PROJECT_NAME': self.project_name,
            'CLUSTER_NAME': self.cluster_name,
            'ZONE': self.zone,
            'CLUSTER_VERSION': self.cluster_version,
            'NODE_COUNT': str(self.node_count),
            'MACHINE_TYPE': self.machine_type,
            'DOCKER_REGISTRY': self.docker_registry,
            'DOCKER_IMAGE_NAME': self.docker_image_name,
            'DOCKER_IMAGE_VERSION': self.docker_image_version,
        }


def get_config_file() -> Optional[Path]:
    """Discover the config source file.

    Resolution order:
    1. $GFS_BOOTSTRAP_CONFIG environment variable
    2. ./gfs-bootstrap.yaml in the working directory

    Returns None when no file is found (environment-only configuration).
    """
    if env_path := os.environ.get('GFS_BOOTSTRAP_CONFIG'):
        path = Path(env_path)
        if path.exists():
            return path
        raise ConfigError(f"GFS_BOOTSTRAP_CONFIG={env_path} does not exist")

    local = Path.cwd() / CONFIG_FILENAME
    if local.exists():
        return local

    return None


def _parse_yaml(path: Path) -> dict:
    """Parse a YAML file and return contents."""
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path}: invalid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping of key/value pairs")
    return data


def load_config_source(path: Optional[Path] = None) -> dict:
    """Load key/value definitions from the config source file.

    Args:
        path: Explicit file path. If None, uses get_config_file().

    Returns:
        Dict of config values (empty if no config file exists)
    """
    if path is None:
        path = get_config_file()
        if path is None:
            logger.debug(f"No {CONFIG_FILENAME} found, using environment only")
            return {}

    data = _parse_yaml(path)

    unknown = set(data.keys()) - KNOWN_FIELDS
    if unknown:
        logger.warning(f"{path.name}: unknown fields: {', '.join(sorted(unknown))}")

    logger.debug(f"Loaded config source {path}: {sorted(data.keys())}")
    return {k: v for k, v in data.items() if k in KNOWN_FIELDS}


def get_output_dir(environ=None, configured=None) -> Path:
    """Directory generated manifests are written to.

    $GFS_MANIFEST_DIR overrides the configured directory, which overrides
    the default ./generated-manifests.
    """
    environ = os.environ if environ is None else environ
    if env_path := environ.get('GFS_MANIFEST_DIR'):
        return Path(env_path)
    if configured:
        return Path(configured)
    return Path.cwd() / DEFAULT_MANIFEST_DIRNAME
