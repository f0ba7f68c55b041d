"""Routing — compiled route table, route params, and link generation.

Routes are registered while actions are declared and compiled into an
immutable lookup structure when the registry freezes.
"""
