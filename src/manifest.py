"""Kubernetes manifest generation for the GlusterFS/Heketi bootstrap.

Manifests are built as typed records and serialized with PyYAML, never by
string interpolation. Three documents are produced, in apply order:

- 00-namespace.yaml: Namespace the bootstrap runs in
- 01-configmap.yaml: project/cluster/zone/node-count as strings
- 02-job.yaml: privileged batch Job running the bootstrap image

The Job reads the config map through configMapKeyRef env vars, so the
container sees the live config map values at start time.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import yaml

from config import ResolvedConfig

logger = logging.getLogger(__name__)

NAMESPACE = 'glusterfs-heketi'
CONFIG_MAP_NAME = 'glusterfs-heketi-bootstrap'
JOB_NAME = 'glusterfs-heketi-bootstrap'
APP_LABEL = 'glusterfs-heketi-bootstrap'

# config field -> config map key
CONFIG_MAP_KEYS = {
    'project_name': 'project-id',
    'cluster_name': 'cluster-name',
    'zone': 'cluster-zone',
    'node_count': 'cluster-node-count',
}

# container env var -> config map key
JOB_ENV_KEYS = {
    'PROJECT_ID': 'project-id',
    'CLUSTER_NAME': 'cluster-name',
    'CLUSTER_ZONE': 'cluster-zone',
    'CLUSTER_NODE_COUNT': 'cluster-node-count',
}


class ManifestError(Exception):
    """Manifest rendering or writing error."""


class Document(Protocol):
    """A renderable Kubernetes object."""
    filename: str

    def to_dict(self) -> dict[str, Any]:
        ...


@dataclass
class Namespace:
    """Namespace holding the bootstrap resources."""
    name: str
    filename: str = '00-namespace.yaml'

    def to_dict(self) -> dict[str, Any]:
        return {
            'apiVersion': 'v1',
            'kind': 'Namespace',
            'metadata': {'name': self.name},
        }


@dataclass
class ConfigMap:
    """Key/value settings exposed to the bootstrap job."""
    name: str
    namespace: str
    data: dict[str, str] = field(default_factory=dict)
    filename: str = '01-configmap.yaml'

    def to_dict(self) -> dict[str, Any]:
        return {
            'apiVersion': 'v1',
            'kind': 'ConfigMap',
            'metadata': {'name': self.name, 'namespace': self.namespace},
            'data': {key: str(value) for key, value in self.data.items()},
        }


@dataclass
class Job:
    """Privileged batch job that runs the bootstrap image once.

    env maps container env var names to keys of config_map.
    """
    name: str
    namespace: str
    image: str
    config_map: str
    env: dict[str, str] = field(default_factory=dict)
    privileged: bool = True
    backoff_limit: int = 0
    filename: str = '02-job.yaml'

    def to_dict(self) -> dict[str, Any]:
        container = {
            'name': self.name,
            'image': self.image,
            'imagePullPolicy': 'Always',
            'securityContext': {'privileged': self.privileged},
            'env': [
                {
                    'name': var,
                    'valueFrom': {
                        'configMapKeyRef': {'name': self.config_map, 'key': key},
                    },
                }
                for var, key in self.env.items()
            ],
        }
        return {
            'apiVersion': 'batch/v1',
            'kind': 'Job',
            'metadata': {
                'name': self.name,
                'namespace': self.namespace,
                'labels': {'app': APP_LABEL},
            },
            'spec': {
                'backoffLimit': self.backoff_limit,
                'template': {
                    'metadata': {'labels': {'app': APP_LABEL}},
                    'spec': {
                        'restartPolicy': 'Never',
                        'containers': [container],
                    },
                },
            },
        }


def build_documents(config: ResolvedConfig) -> list[Document]:
    """Build the namespace, config map and job records for a config."""
    data = {key: str(getattr(config, attr)) for attr, key in CONFIG_MAP_KEYS.items()}
    return [
        Namespace(name=NAMESPACE),
        ConfigMap(name=CONFIG_MAP_NAME, namespace=NAMESPACE, data=data),
        Job(
            name=JOB_NAME,
            namespace=NAMESPACE,
            image=config.job_image,
            config_map=CONFIG_MAP_NAME,
            env=dict(JOB_ENV_KEYS),
        ),
    ]


def render(document: Document) -> str:
    """Serialize a document to YAML."""
    return yaml.safe_dump(
        document.to_dict(),
        sort_keys=False,
        default_flow_style=False,
    )


def generate_manifests(config: ResolvedConfig, output_dir: Path) -> list[Path]:
    """Render all manifests into output_dir.

    The directory is cleared first so no stale files survive a previous run.

    Returns:
        Paths of the written files, in apply order.

    Raises:
        ManifestError: If the directory cannot be cleared or written.
    """
    output_dir = Path(output_dir)
    try:
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)

        written = []
        for document in build_documents(config):
            path = output_dir / document.filename
            path.write_text(render(document), encoding='utf-8')
            logger.debug(f"Wrote {path}")
            written.append(path)
    except OSError as e:
        raise ManifestError(f"Cannot write manifests to {output_dir}: {e}") from e

    return written


def list_manifests(output_dir: Path) -> list[Path]:
    """Generated manifest files in apply order (empty if none)."""
    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        return []
    return sorted(p for p in output_dir.glob('*.yaml') if p.is_file())
