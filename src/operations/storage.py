"""GlusterFS/Heketi storage operations.

generate_manifests renders the bootstrap manifests, deploy submits them to
the cluster and delete_gluster_disks removes brick disks left behind after
the cluster is gone.
"""

from actions import DeleteDisksAction, GenerateManifestsAction, KubectlApplyAction
from config import ResolvedConfig
from operations import register_operation


@register_operation
class GenerateManifests:
    """Render namespace, config map and job manifests."""

    name = 'generate_manifests'
    description = 'Render the bootstrap manifests to the output directory'

    def get_phases(self, _config: ResolvedConfig) -> list[tuple]:
        return [
            ('generate', GenerateManifestsAction(name='generate-manifests'),
             'Render namespace, config map and job'),
        ]


@register_operation
class Deploy:
    """Apply generated manifests to the cluster."""

    name = 'deploy'
    description = 'Apply the generated manifests with kubectl'

    def get_phases(self, _config: ResolvedConfig) -> list[tuple]:
        return [
            ('apply', KubectlApplyAction(name='deploy'), 'kubectl apply'),
        ]


@register_operation
class DeleteGlusterDisks:
    """Delete orphaned GlusterFS brick disks."""

    name = 'delete_gluster_disks'
    description = 'Delete GlusterFS brick disks matching the disk filter'

    def get_phases(self, _config: ResolvedConfig) -> list[tuple]:
        return [
            ('delete_disks', DeleteDisksAction(name='delete-disks'), 'Delete brick disks'),
        ]
