"""Kubernetes actions."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from common import ActionResult, run_command
from config import ResolvedConfig
from manifest import list_manifests

logger = logging.getLogger(__name__)


@dataclass
class KubectlApplyAction:
    """Apply every generated manifest in one kubectl submission."""
    name: str
    manifest_dir: Optional[Path] = None

    def run(self, config: ResolvedConfig, context: dict) -> ActionResult:
        """Run kubectl apply -f on the manifest directory."""
        start = time.time()

        manifest_dir = Path(context.get('manifest_dir') or self.manifest_dir or config.manifest_dir)
        manifests = list_manifests(manifest_dir)
        if not manifests:
            return ActionResult(
                success=False,
                message=f"No manifests in {manifest_dir}. Run generate_manifests first",
                duration=time.time() - start
            )

        logger.info(f"[{self.name}] Applying {len(manifests)} manifest(s) from {manifest_dir}...")
        rc, _, err = run_command(['kubectl', 'apply', '-f', str(manifest_dir)], capture=False)
        if rc != 0:
            return ActionResult(
                success=False,
                message=f"kubectl apply failed (exit {rc}){': ' + err if err else ''}",
                duration=time.time() - start
            )

        return ActionResult(
            success=True,
            message=f"Applied {len(manifests)} manifest(s)",
            duration=time.time() - start
        )
