"""Pre-flight validation checks.

Every check returns a list of error messages (empty if valid) so the caller
can report all problems at once instead of stopping at the first one.
"""

import logging
from typing import Callable, Optional

from common import find_tool

logger = logging.getLogger(__name__)

# Storage layer needs three nodes for replica placement and quorum
MIN_NODE_COUNT = 3

# Tools every invocation needs (docker is only needed by build/push)
REQUIRED_TOOLS = ('gcloud', 'kubectl')

TOOL_HINTS = {
    'gcloud': 'Install the Google Cloud SDK: https://cloud.google.com/sdk/docs/install',
    'kubectl': 'Install kubectl: gcloud components install kubectl',
    'docker': 'Install Docker: https://docs.docker.com/engine/install/',
}

REQUIRED_FIELDS = {
    'project_name': 'PROJECT_NAME',
    'cluster_name': 'CLUSTER_NAME',
    'zone': 'ZONE',
}


# -----------------------------------------------------------------------------
# Tool Validation
# -----------------------------------------------------------------------------

def validate_tools(tools=REQUIRED_TOOLS,
                   which: Optional[Callable[[str], Optional[str]]] = None) -> list[str]:
    """Check that external tool binaries are on PATH.

    Args:
        tools: Executable names to look up
        which: Lookup function (defaults to common.find_tool)

    Returns:
        List of validation error messages (empty if valid)
    """
    which = which or find_tool
    errors = []
    for tool in tools:
        if not which(tool):
            hint = TOOL_HINTS.get(tool, f"Install {tool} and make sure it is on PATH")
            errors.append(
                f"Required tool '{tool}' not found on PATH\n"
                f"  {hint}"
            )
    return errors


# -----------------------------------------------------------------------------
# Config Validation
# -----------------------------------------------------------------------------

def validate_required_fields(values: dict) -> list[str]:
    """Check that project, cluster and zone are set.

    Args:
        values: Merged config values keyed by field name

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    for key, env_var in REQUIRED_FIELDS.items():
        if not str(values.get(key) or '').strip():
            errors.append(
                f"{key} is not set\n"
                f"  Set '{key}' in gfs-bootstrap.yaml or export {env_var}"
            )
    return errors


def parse_node_count(value) -> tuple[Optional[int], list[str]]:
    """Convert a node count value to int.

    Returns:
        (node_count, errors) tuple. node_count is None when invalid.
    """
    if isinstance(value, bool):
        return None, [f"node_count must be an integer, got {value!r}"]
    try:
        return int(str(value).strip()), []
    except ValueError:
        return None, [
            f"node_count must be an integer, got {value!r}\n"
            f"  Set NODE_COUNT to {MIN_NODE_COUNT} or more"
        ]


def validate_node_count(node_count: int) -> list[str]:
    """Check node count meets the storage layer minimum.

    Returns:
        List of validation error messages (empty if valid)
    """
    if node_count < MIN_NODE_COUNT:
        return [
            f"node_count is {node_count}, GlusterFS needs at least {MIN_NODE_COUNT} nodes\n"
            f"  Set NODE_COUNT to {MIN_NODE_COUNT} or more"
        ]
    return []


def format_errors(errors: list[str]) -> str:
    """Format validation errors for display."""
    lines = ["", "Pre-flight validation failed:"]
    for error in errors:
        # Indent multi-line errors
        for i, line in enumerate(error.split('\n')):
            prefix = "  ✗ " if i == 0 else "    "
            lines.append(f"{prefix}{line}")
    lines.append("")
    return '\n'.join(lines)
