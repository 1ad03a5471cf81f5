"""Extension layer: plugin system via pluggy.

Plugins register body transforms (markdown -> HTML and friends).
INVARIANT: Plugin failures are warnings, never errors.
"""

from blogctl.plugins.hookspecs import hookimpl
from blogctl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
