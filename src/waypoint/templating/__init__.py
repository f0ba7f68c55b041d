"""Kida environment setup with link helpers bound to an action registry.

Templates link to actions by identifier instead of hard-coding paths::

    <a{{ link_for("Users::Show", id=user.id) | link_attrs }}>{{ user.name }}</a>
    <form action="{{ path_for('Users::Create') }}" method="post">

Non-GET links render as htmx attributes (``hx-delete="/users/1"``).
"""

import html
from collections.abc import Callable
from typing import Any

from kida import Environment
from kida.template import Markup

from waypoint.actions.registry import ActionRegistry
from waypoint.routing.links import Link


def link_attrs(link: Link) -> Markup:
    """Render the attribute that follows *link* with its own method.

    Example:
        link_attrs(GET /users/1)    -> ' href="/users/1"'
        link_attrs(DELETE /users/1) -> ' hx-delete="/users/1"'
    """
    attr = "href" if link.method == "GET" else f"hx-{link.method.lower()}"
    return Markup(f' {attr}="{html.escape(link.href)}"')


def link_globals(registry: ActionRegistry) -> dict[str, Callable[..., Any]]:
    """Template globals that build links against *registry*."""
    return {
        "link_for": registry.link,
        "path_for": registry.path_for,
        "url_for": registry.url_for,
    }


def create_environment(registry: ActionRegistry, **env_options: Any) -> Environment:
    """Create a kida Environment with link helpers for *registry*.

    *env_options* are passed to ``Environment`` unchanged (loader,
    autoescape, ...).
    """
    env_options.setdefault("autoescape", True)
    env = Environment(**env_options)
    env.update_filters({"link_attrs": link_attrs})
    for name, value in link_globals(registry).items():
        env.add_global(name, value)
    return env
