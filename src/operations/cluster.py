"""GKE cluster lifecycle operations."""

from actions import CreateClusterAction, DeleteClusterAction, DeleteDisksAction
from config import ResolvedConfig
from operations import register_operation


@register_operation
class CreateCluster:
    """Provision the GKE cluster."""

    name = 'create_cluster'
    description = 'Create the GKE cluster'

    def get_phases(self, config: ResolvedConfig) -> list[tuple]:
        return [
            ('create', CreateClusterAction(name='create-cluster'),
             f'Create {config.cluster_name}'),
        ]


@register_operation
class DeleteCluster:
    """Delete the GKE cluster."""

    name = 'delete_cluster'
    description = 'Delete the GKE cluster (no prompt)'

    def get_phases(self, config: ResolvedConfig) -> list[tuple]:
        return [
            ('delete', DeleteClusterAction(name='delete-cluster'),
             f'Delete {config.cluster_name}'),
        ]


@register_operation
class DeleteClusterAndDisks:
    """Delete the cluster, then its brick disks.

    Disks are only deleted once the cluster is gone; a failed cluster
    deletion stops the operation.
    """

    name = 'delete_cluster_and_disks'
    description = 'Delete the GKE cluster, then the GlusterFS brick disks'

    def get_phases(self, config: ResolvedConfig) -> list[tuple]:
        return [
            ('delete_cluster', DeleteClusterAction(name='delete-cluster'),
             f'Delete {config.cluster_name}'),
            ('delete_disks', DeleteDisksAction(name='delete-disks'), 'Delete brick disks'),
        ]
