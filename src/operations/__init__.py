"""Named operations and orchestration."""

import logging
import time
from typing import Any, Protocol, runtime_checkable

from config import ResolvedConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class Operation(Protocol):
    """Protocol for operation definitions.

    Class attributes:
        name: Operation identifier used on the command line (e.g., 'deploy')
        description: Human-readable description for usage output
    """
    name: str
    description: str

    def get_phases(self, config: ResolvedConfig) -> list[tuple[str, Any, str]]:
        """Return list of (phase_name, action, description) tuples."""
        ...


class Orchestrator:
    """Runs an operation's phases in order, stopping at the first failure."""

    def __init__(self, operation: Operation, config: ResolvedConfig):
        self.operation = operation
        self.config = config
        self.context: dict[str, Any] = {}

    def run(self) -> bool:
        """Run all phases. Returns True if all passed."""
        logger.info(f"Starting '{self.operation.name}' for cluster: {self.config.cluster_name}")

        phases = self.operation.get_phases(self.config)
        all_passed = True
        start_time = time.time()

        for phase_name, action, description in phases:
            logger.info(f"Running phase: {phase_name} - {description}")

            try:
                result = action.run(self.config, self.context)
            except Exception as e:
                logger.exception(f"Phase {phase_name} raised exception")
                logger.error(f"Phase {phase_name} failed: {e}")
                all_passed = False
                break

            if result.success:
                logger.info(f"Phase {phase_name} passed: {result.message} ({result.duration:.1f}s)")
                self.context.update(result.context_updates or {})
            else:
                logger.error(f"Phase {phase_name} failed: {result.message}")
                all_passed = False
                break

        total_time = time.time() - start_time
        status = "completed" if all_passed else "failed"
        logger.info(f"'{self.operation.name}' {status} in {total_time:.1f}s")
        return all_passed


# Registry of available operations
_operations: dict[str, type[Operation]] = {}


def register_operation(cls: type[Operation]) -> type[Operation]:
    """Decorator to register an operation class."""
    _operations[cls.name] = cls
    return cls


def get_operation(name: str) -> Operation:
    """Get an operation instance by name."""
    if name not in _operations:
        available = list_operations()
        raise ValueError(f"Unknown operation: {name}. Available: {available}")
    return _operations[name]()


def list_operations() -> list[str]:
    """List available operation names in registration order."""
    return list(_operations.keys())


# Import operations to trigger registration
from operations import image  # noqa: E402, F401
from operations import storage  # noqa: E402, F401
from operations import cluster  # noqa: E402, F401
