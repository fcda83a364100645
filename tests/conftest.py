"""Shared pytest fixtures for gfs-bootstrap tests."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from config import ResolvedConfig  # noqa: E402


def _which_all(name):
    """Tool lookup that finds every tool."""
    return f'/usr/bin/{name}'


@pytest.fixture
def which_all():
    """Tool lookup that reports every tool as installed."""
    return _which_all


@pytest.fixture
def source():
    """Minimal valid config source."""
    return {
        'project_name': 'proj1',
        'cluster_name': 'c1',
        'zone': 'us-central1-a',
    }


@pytest.fixture
def config():
    """Resolved config with defaults and an explicit image."""
    return ResolvedConfig(
        project_name='proj1',
        cluster_name='c1',
        zone='us-central1-a',
        job_image='gcr.io/proj1/glusterfs-heketi-bootstrap:0.0.1',
        docker_registry='gcr.io/proj1',
    )
