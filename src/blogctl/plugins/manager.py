"""Plugin loading and the body transform registry.

Two plugin sources:

- installed packages advertising a ``blogctl.plugins`` entry point;
- single ``*.py`` files in the site's ``.blogctl/plugins/`` directory.

Either may expose a class instead of an instance; classes are
instantiated before registration.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

import pluggy

from blogctl.plugins.hookspecs import BlogctlHookSpec

if TYPE_CHECKING:
    from blogctl.infrastructure.parser import BodyTransform

PROJECT_NAME = "blogctl"
ENTRY_POINT_GROUP = "blogctl.plugins"
LOCAL_MODULE_PREFIX = "blogctl_local_plugin_"

logger = logging.getLogger(__name__)


def _is_plugin_class(obj: object) -> bool:
    """A class with at least one public ``@hookimpl`` method."""
    if not inspect.isclass(obj):
        return False
    marker = f"{PROJECT_NAME}_impl"
    return any(
        getattr(getattr(obj, name, None), marker, None)
        for name in dir(obj)
        if not name.startswith("_")
    )


def _load_module(py_file: Path) -> ModuleType | None:
    """Import a standalone plugin file; None (with a warning) if it fails."""
    module_name = f"{LOCAL_MODULE_PREFIX}{py_file.stem}"
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        logger.warning("Cannot import local plugin %s", py_file)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
        return None
    return module


class PluginManager:
    """Registers plugins and merges the body transforms they provide."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(BlogctlHookSpec)

    def discover_and_load(
        self,
        *,
        local_dir: Path | None = None,
        entry_points: bool = True,
    ) -> list[str]:
        """Load entry-point plugins, then files from *local_dir*.

        Returns the names of every registered plugin.
        """
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._instantiate_registered_classes()
        if local_dir is not None and local_dir.is_dir():
            for py_file in sorted(local_dir.glob("*.py")):
                if not py_file.name.startswith("_"):
                    self._load_local(py_file)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        plugin_name = name or type(plugin).__name__
        self._pm.register(plugin, name=plugin_name)
        logger.debug("Registered plugin %s", plugin_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    def body_transforms(self) -> dict[str, BodyTransform]:
        """Extension -> transform, merged across plugins.

        Plugins are asked in pluggy call order (most recently registered
        first) and the first to claim an extension keeps it. A plugin
        that raises or returns something other than a dict is skipped.
        """
        registry: dict[str, BodyTransform] = {}
        for impl in reversed(self._pm.hook.register_body_transforms.get_hookimpls()):
            try:
                provided = impl.function()
            except Exception:
                logger.warning(
                    "Plugin %s failed to register body transforms",
                    impl.plugin_name,
                    exc_info=True,
                )
                continue
            if provided is None:
                continue
            if not isinstance(provided, dict):
                logger.warning("Plugin %s returned non-dict body transforms", impl.plugin_name)
                continue
            for extension, transform in provided.items():
                if extension in registry:
                    logger.warning(
                        "Plugin %s: %s transform already registered, ignoring",
                        impl.plugin_name,
                        extension,
                    )
                else:
                    registry[extension] = transform
        return registry

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load_local(self, py_file: Path) -> None:
        module = _load_module(py_file)
        if module is None:
            return
        for _name, cls in inspect.getmembers(module, _is_plugin_class):
            if cls.__module__ != module.__name__:
                continue
            instance = self._instantiate(cls, str(py_file))
            if instance is not None:
                self.register_plugin(instance, name=f"{module.__name__}.{cls.__name__}")

    def _instantiate_registered_classes(self) -> None:
        """Swap entry-point plugin classes for instances so hooks get ``self``."""
        for plugin in list(self._pm.get_plugins()):
            if not _is_plugin_class(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            instance = self._instantiate(plugin, plugin_name)
            if instance is not None:
                self.register_plugin(instance, name=plugin_name)

    @staticmethod
    def _instantiate(cls: type, origin: str) -> object | None:
        try:
            return cls()
        except Exception:
            logger.warning(
                "Cannot instantiate plugin %s from %s", cls.__name__, origin, exc_info=True
            )
            return None
