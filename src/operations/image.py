"""Bootstrap image operations."""

from actions import DockerBuildAction, DockerPushAction
from config import ResolvedConfig
from operations import register_operation


@register_operation
class BuildImage:
    """Build the bootstrap container image."""

    name = 'build_image'
    description = 'Build the bootstrap image tagged registry/name:version'

    def get_phases(self, _config: ResolvedConfig) -> list[tuple]:
        return [
            ('build', DockerBuildAction(name='build-image'), 'docker build'),
        ]


@register_operation
class PushImage:
    """Push the bootstrap container image."""

    name = 'push_image'
    description = 'Push the bootstrap image to the registry'

    def get_phases(self, _config: ResolvedConfig) -> list[tuple]:
        return [
            ('push', DockerPushAction(name='push-image'), 'docker push'),
        ]
