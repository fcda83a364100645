"""Reusable bootstrap actions."""

from actions.docker import DockerBuildAction, DockerPushAction
from actions.gcloud import CreateClusterAction, DeleteClusterAction, DeleteDisksAction
from actions.kubectl import KubectlApplyAction
from actions.manifests import GenerateManifestsAction

__all__ = [
    'DockerBuildAction',
    'DockerPushAction',
    'CreateClusterAction',
    'DeleteClusterAction',
    'DeleteDisksAction',
    'KubectlApplyAction',
    'GenerateManifestsAction',
]
