"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus single-file plugins from the site's local plugin directory.
INVARIANT: Plugin failures are warnings, never errors.
"""

from attachments.plugins.hookspecs import hookimpl
from attachments.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
