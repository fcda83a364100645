"""Config resolution for gfs-bootstrap.

Merges the config source file, environment overrides and built-in defaults
into a single ResolvedConfig, then validates it. Consumers receive fully
computed values (registry, job image) and never read the environment
themselves.

Resolution order (per field):
1. Environment variable (upper-case field name, e.g. NODE_COUNT)
2. Config source value (gfs-bootstrap.yaml)
3. Built-in default

The manifest directory is the exception: $GFS_MANIFEST_DIR, then manifest_dir,
then ./generated-manifests under the working directory.

Job image:
- No explicit image name (DOCKER_IMAGE_NAME / docker_image_name) -> public
  prebuilt bootstrap image
- Otherwise -> {docker_registry}/{docker_image_name}:{docker_image_version}
"""

import logging
import os
from dataclasses import MISSING, fields
from typing import Any, Callable, Mapping, Optional

from config import ResolvedConfig, ValidationError, get_output_dir, load_config_source
from validation import (
    REQUIRED_TOOLS,
    parse_node_count,
    validate_node_count,
    validate_required_fields,
    validate_tools,
)

logger = logging.getLogger(__name__)

PUBLIC_JOB_IMAGE = 'docker.io/gluster/glusterfs-heketi-bootstrap:0.0.1'

DEFAULTS: dict[str, Any] = {
    f.name: f.default for f in fields(ResolvedConfig) if f.default is not MISSING
}


def default_registry(project_name: str) -> str:
    """Container registry path for a project."""
    return f"gcr.io/{project_name}"


class ConfigResolver:
    """Resolves config source + environment into a ResolvedConfig."""

    def __init__(
        self,
        source: Optional[dict] = None,
        environ: Optional[Mapping[str, str]] = None,
        which: Optional[Callable[[str], Optional[str]]] = None,
        required_tools=REQUIRED_TOOLS,
    ):
        """Initialize resolver.

        Args:
            source: Config source values. If None, loads gfs-bootstrap.yaml.
            environ: Environment overrides. If None, uses os.environ.
            which: Tool lookup function (defaults to common.find_tool)
            required_tools: Executables that must be present
        """
        self.source = load_config_source() if source is None else dict(source)
        self.environ = os.environ if environ is None else environ
        self.which = which
        self.required_tools = required_tools

    def _lookup(self, key: str) -> Any:
        """Return the highest-priority value for a field, or None."""
        env_value = self.environ.get(key.upper())
        if env_value not in (None, ''):
            return env_value
        source_value = self.source.get(key)
        if source_value not in (None, ''):
            return source_value
        return None

    def _get(self, key: str) -> Any:
        value = self._lookup(key)
        return DEFAULTS.get(key) if value is None else value

    def has_image_override(self) -> bool:
        """True if an image name was given explicitly (not the default)."""
        return self._lookup('docker_image_name') is not None

    def resolve_job_image(self, registry: str, name: str, version: str) -> str:
        """Image reference the bootstrap job runs."""
        if not self.has_image_override():
            return PUBLIC_JOB_IMAGE
        return f"{registry}/{name}:{version}"

    def resolve(self) -> ResolvedConfig:
        """Merge, validate and return the resolved config.

        Raises:
            ValidationError: With every failure reason (tools and config).
        """
        errors = validate_tools(self.required_tools, which=self.which)

        values = {key: self._lookup(key) for key in ('project_name', 'cluster_name', 'zone')}
        errors.extend(validate_required_fields(values))

        node_count, count_errors = parse_node_count(self._get('node_count'))
        errors.extend(count_errors)
        if node_count is not None:
            errors.extend(validate_node_count(node_count))

        if errors:
            for error in errors:
                logger.debug(f"Validation: {error.splitlines()[0]}")
            raise ValidationError(errors)

        project_name = str(values['project_name']).strip()
        registry = str(self._lookup('docker_registry') or default_registry(project_name))
        image_name = str(self._get('docker_image_name'))
        image_version = str(self._get('docker_image_version'))

        config = ResolvedConfig(
            project_name=project_name,
            cluster_name=str(values['cluster_name']).strip(),
            zone=str(values['zone']).strip(),
            job_image=self.resolve_job_image(registry, image_name, image_version),
            cluster_version=str(self._get('cluster_version')),
            node_count=node_count,
            machine_type=str(self._get('machine_type')),
            docker_registry=registry,
            docker_image_name=image_name,
            docker_image_version=image_version,
            disk_filter=str(self._get('disk_filter')),
            docker_context=str(self._get('docker_context')),
            cluster_script=str(self._get('cluster_script')),
            manifest_dir=str(get_output_dir(self.environ, self.source.get('manifest_dir'))),
        )
        logger.debug(f"Resolved config: {config}")
        return config


def resolve_config(
    source: Optional[dict] = None,
    environ: Optional[Mapping[str, str]] = None,
    which: Optional[Callable[[str], Optional[str]]] = None,
) -> ResolvedConfig:
    """Resolve configuration in one call (see ConfigResolver)."""
    return ConfigResolver(source=source, environ=environ, which=which).resolve()
