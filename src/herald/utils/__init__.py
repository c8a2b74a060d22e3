"""Support namespace for cross-cutting, dependency-light helpers.

Small, stateless helpers (e.g. slugification) that would otherwise clutter
feature packages. No business rules and no wiring live here.

Nothing is re-exported at the package level. Import specific helpers from
their defining modules.
"""
