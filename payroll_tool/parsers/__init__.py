"""Coercion of loosely-typed payload values and source rows."""
