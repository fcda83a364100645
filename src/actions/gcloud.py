"""Google Cloud actions (GKE clusters and Compute Engine disks)."""

import logging
import os
import time
from dataclasses import dataclass
from typing import Optional

from common import ActionResult, run_command
from config import ResolvedConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Disk:
    """One row of a `gcloud compute disks list` table."""
    name: str
    location: str = ''
    scope: str = 'zone'


def _column(header: list[str], *names: str) -> Optional[int]:
    for name in names:
        if name in header:
            return header.index(name)
    return None


def parse_disk_listing(output: str) -> list[Disk]:
    """Parse a `gcloud compute disks list` table.

    The first line is the column header; the name is the first column.
    Location comes from LOCATION (ZONE on older gcloud releases), and
    LOCATION_SCOPE marks regional disks.
    """
    lines = output.splitlines()
    if not lines:
        return []

    header = lines[0].split()
    location_col = _column(header, 'LOCATION', 'ZONE')
    scope_col = _column(header, 'LOCATION_SCOPE')

    disks = []
    for line in lines[1:]:
        row = line.split()
        if not row:
            continue
        location = row[location_col] if location_col is not None and location_col < len(row) else ''
        scope = row[scope_col] if scope_col is not None and scope_col < len(row) else 'zone'
        disks.append(Disk(name=row[0], location=location, scope=scope))
    return disks


def group_by_location(disks: list[Disk], default_zone: str) -> dict[tuple[str, str], list[str]]:
    """Group disk names by (scope, location), in listing order.

    Rows without a location fall back to default_zone.
    """
    groups: dict[tuple[str, str], list[str]] = {}
    for disk in disks:
        key = (disk.scope, disk.location or default_zone)
        groups.setdefault(key, []).append(disk.name)
    return groups


@dataclass
class CreateClusterAction:
    """Create the GKE cluster.

    If script is set (or config.cluster_script), that provisioner runs with
    the resolved config exported as environment variables. Otherwise the
    cluster is created directly with gcloud.
    """
    name: str
    script: Optional[str] = None

    def _gcloud_cmd(self, config: ResolvedConfig) -> list[str]:
        cmd = [
            'gcloud', 'container', 'clusters', 'create', config.cluster_name,
            '--project', config.project_name,
            '--zone', config.zone,
            '--num-nodes', str(config.node_count),
            '--machine-type', config.machine_type,
        ]
        if config.cluster_version:
            cmd.extend(['--cluster-version', config.cluster_version])
        return cmd

    def run(self, config: ResolvedConfig, _context: dict) -> ActionResult:
        """Create the cluster via provisioner script or gcloud."""
        start = time.time()

        script = self.script or config.cluster_script
        if script:
            logger.info(f"[{self.name}] Running cluster provisioner {script}...")
            env = {**os.environ, **config.as_env()}
            rc, _, err = run_command([script], env=env, capture=False)
        else:
            logger.info(f"[{self.name}] Creating cluster {config.cluster_name} "
                        f"({config.node_count}x {config.machine_type}) in {config.zone}...")
            rc, _, err = run_command(self._gcloud_cmd(config), capture=False)

        if rc != 0:
            return ActionResult(
                success=False,
                message=f"Cluster creation failed (exit {rc}){': ' + err if err else ''}",
                duration=time.time() - start
            )

        return ActionResult(
            success=True,
            message=f"Cluster {config.cluster_name} created",
            duration=time.time() - start
        )


@dataclass
class DeleteClusterAction:
    """Delete the GKE cluster without prompting."""
    name: str

    def run(self, config: ResolvedConfig, _context: dict) -> ActionResult:
        """Run gcloud container clusters delete."""
        start = time.time()

        logger.info(f"[{self.name}] Deleting cluster {config.cluster_name} in {config.zone}...")
        rc, _, err = run_command([
            'gcloud', 'container', 'clusters', 'delete', config.cluster_name,
            '--project', config.project_name,
            '--zone', config.zone,
            '--quiet',
        ], capture=False)

        if rc != 0:
            return ActionResult(
                success=False,
                message=f"Cluster deletion failed (exit {rc}){': ' + err if err else ''}",
                duration=time.time() - start
            )

        return ActionResult(
            success=True,
            message=f"Cluster {config.cluster_name} deleted",
            duration=time.time() - start
        )


@dataclass
class DeleteDisksAction:
    """Delete the GlusterFS brick disks matching config.disk_filter.

    The listing covers the whole project, so disks are deleted with one
    call per location (--zone, or --region for regional disks). An empty
    listing is a no-op; gcloud delete is never called without targets.
    """
    name: str

    def run(self, config: ResolvedConfig, _context: dict) -> ActionResult:
        """List matching disks, then delete them location by location."""
        start = time.time()

        logger.info(f"[{self.name}] Listing disks matching '{config.disk_filter}'...")
        rc, out, err = run_command([
            'gcloud', 'compute', 'disks', 'list',
            '--project', config.project_name,
            '--filter', config.disk_filter,
        ])
        if rc != 0:
            return ActionResult(
                success=False,
                message=f"Failed to list disks: {err.strip()}",
                duration=time.time() - start
            )

        disks = parse_disk_listing(out)
        if not disks:
            logger.info(f"[{self.name}] No disks to delete")
            return ActionResult(
                success=True,
                message="No matching disks",
                duration=time.time() - start,
                context_updates={'deleted_disks': []}
            )

        deleted = []
        failures = []
        for (scope, location), names in group_by_location(disks, config.zone).items():
            flag = '--region' if scope == 'region' else '--zone'
            logger.info(f"[{self.name}] Deleting {len(names)} disk(s) in {location}: {', '.join(names)}")
            rc, _, err = run_command([
                'gcloud', 'compute', 'disks', 'delete', *names,
                '--project', config.project_name,
                flag, location,
                '--quiet',
            ])
            if rc != 0:
                failures.append(f"{location}: {err.strip()}")
                continue
            deleted.extend(names)

        if failures:
            return ActionResult(
                success=False,
                message=f"Failed to delete disks in {'; '.join(failures)}",
                duration=time.time() - start,
                context_updates={'deleted_disks': deleted}
            )

        return ActionResult(
            success=True,
            message=f"Deleted {len(deleted)} disk(s)",
            duration=time.time() - start,
            context_updates={'deleted_disks': deleted}
        )
