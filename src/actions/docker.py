"""Container image actions."""

import logging
import time
from dataclasses import dataclass

from common import ActionResult, find_tool, run_command
from config import ResolvedConfig

logger = logging.getLogger(__name__)


@dataclass
class DockerBuildAction:
    """Build the bootstrap image and tag it for the project registry.

    Missing docker is reported and skipped, not treated as a failure.
    """
    name: str

    def run(self, config: ResolvedConfig, _context: dict) -> ActionResult:
        """Run docker build."""
        start = time.time()

        if not find_tool('docker'):
            logger.warning(f"[{self.name}] docker not found on PATH, skipping image build")
            return ActionResult(
                success=True,
                message="docker not installed, build skipped",
                duration=time.time() - start
            )

        tag = config.image_tag
        logger.info(f"[{self.name}] Building {tag} from {config.docker_context}...")
        rc, _, err = run_command(
            ['docker', 'build', '-t', tag, config.docker_context],
            capture=False
        )
        if rc != 0:
            return ActionResult(
                success=False,
                message=f"docker build failed (exit {rc}){': ' + err if err else ''}",
                duration=time.time() - start
            )

        return ActionResult(
            success=True,
            message=f"Built {tag}",
            duration=time.time() - start,
            context_updates={'image_tag': tag}
        )


@dataclass
class DockerPushAction:
    """Push the bootstrap image to the project registry."""
    name: str

    def run(self, config: ResolvedConfig, _context: dict) -> ActionResult:
        """Run docker push."""
        start = time.time()

        tag = config.image_tag
        logger.info(f"[{self.name}] Pushing {tag}...")
        rc, _, err = run_command(['docker', 'push', tag], capture=False)
        if rc != 0:
            return ActionResult(
                success=False,
                message=f"docker push failed (exit {rc}){': ' + err if err else ''}",
                duration=time.time() - start
            )

        return ActionResult(
            success=True,
            message=f"Pushed {tag}",
            duration=time.time() - start
        )
