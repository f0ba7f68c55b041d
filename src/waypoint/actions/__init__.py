"""Actions — identifiers, conventional kinds, route derivation, and the registry."""
