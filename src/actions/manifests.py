"""Manifest rendering action."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from common import ActionResult
from config import ResolvedConfig
from manifest import ManifestError, generate_manifests

logger = logging.getLogger(__name__)


@dataclass
class GenerateManifestsAction:
    """Render namespace, config map and job manifests to disk."""
    name: str
    output_dir: Optional[Path] = None

    def run(self, config: ResolvedConfig, _context: dict) -> ActionResult:
        """Regenerate the manifest directory."""
        start = time.time()

        output_dir = Path(self.output_dir or config.manifest_dir)
        logger.info(f"[{self.name}] Generating manifests in {output_dir}...")
        try:
            written = generate_manifests(config, output_dir)
        except ManifestError as e:
            return ActionResult(
                success=False,
                message=str(e),
                duration=time.time() - start
            )

        for path in written:
            logger.info(f"[{self.name}] Wrote {path.name}")

        return ActionResult(
            success=True,
            message=f"Generated {len(written)} manifests in {output_dir}",
            duration=time.time() - start,
            context_updates={'manifest_dir': str(output_dir)}
        )
