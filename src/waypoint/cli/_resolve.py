"""Registry import resolution — resolves ``"module:attribute"`` strings.

Used by ``waypoint routes`` to locate an ActionRegistry from a
user-supplied import string.
"""

import importlib

from waypoint.actions.registry import ActionRegistry


def resolve_registry(import_string: str) -> ActionRegistry:
    """Resolve an import string to an ActionRegistry instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"actions"`` (e.g. ``"myapp"`` resolves to
    ``myapp.actions``).

    Supports factory functions: if the resolved object is callable and
    not a registry, it is called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        WaypointError: If importing the module declares an invalid action.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not an ``ActionRegistry``.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "actions"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, ActionRegistry):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, ActionRegistry):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not an ActionRegistry"
        raise TypeError(msg)

    return obj
