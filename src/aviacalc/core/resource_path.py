"""Resource path resolution for source checkouts and bundled builds.

Typical usage:
    from aviacalc.core.resource_path import get_config_path

    policy_path = get_config_path("fuel_policy.yaml")
"""

import sys
from pathlib import Path


def is_bundled() -> bool:
    """Check if running from a PyInstaller bundle."""
    return hasattr(sys, "_MEIPASS")


def get_project_root() -> Path:
    """Get the project root directory.

    Returns:
        The bundle directory when bundled, otherwise the checkout root
        (three levels above src/aviacalc/core).
    """
    if is_bundled():
        return Path(getattr(sys, "_MEIPASS"))
    return Path(__file__).parent.parent.parent.parent


def get_resource_path(relative_path: str) -> Path:
    """Get absolute path to a resource relative to the project root.

    Args:
        relative_path: Relative path from project root (e.g., "config/logging.yaml").

    Returns:
        Absolute path to the resource.
    """
    return get_project_root() / relative_path


def get_config_path(config_file: str) -> Path:
    """Get path to a configuration file under config/.

    Args:
        config_file: Config filename (e.g., "fuel_policy.yaml").

    Returns:
        Absolute path to the config file.

    Examples:
        >>> get_config_path("logging.yaml").name
        'logging.yaml'
    """
    return get_resource_path(f"config/{config_file}")
