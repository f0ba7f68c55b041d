"""Waypoint — convention-based routes for action-style web apps.

Derives an HTTP method and path template from an action's structural
name, so ``Users::Show`` serves ``GET /users/:id`` and
``Projects::Users::Index`` (nested) serves ``GET /projects/:project_id/users``.

Basic usage::

    from waypoint import ActionRegistry

    actions = ActionRegistry()

    @actions.action("Users::Show", params={"id": "int"})
    def show(params):
        return f"user {params.get_int('id')}"

    match = actions.match("GET", "/users/42")
    actions.path_for("Users::Show", id=42)  # "/users/42"

Pure derivation::

    from waypoint import derive

    str(derive("Admin::Users::Edit"))  # "GET /admin/users/:id/edit"
"""

__version__ = "0.1.0-dev"

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "Action": "waypoint.actions.registry",
    "ActionIdentifier": "waypoint.actions.identifier",
    "ActionKind": "waypoint.actions.kinds",
    "ActionRegistry": "waypoint.actions.registry",
    "ConfigurationError": "waypoint.errors",
    "DerivationError": "waypoint.errors",
    "HTTPError": "waypoint.errors",
    "InvalidRouteParam": "waypoint.errors",
    "Link": "waypoint.routing.links",
    "MalformedIdentifier": "waypoint.errors",
    "MethodNotAllowed": "waypoint.errors",
    "MissingRouteParam": "waypoint.errors",
    "NotFound": "waypoint.errors",
    "RouteConfig": "waypoint.config",
    "RouteDescriptor": "waypoint.actions.derive",
    "RouteParams": "waypoint.routing.params",
    "Router": "waypoint.routing.router",
    "UnknownActionKind": "waypoint.errors",
    "WaypointError": "waypoint.errors",
    "derive": "waypoint.actions.derive",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        raise AttributeError(f"module 'waypoint' has no attribute {name!r}")

    import importlib

    return getattr(importlib.import_module(module_path), name)
