"""wsnav - in-memory workspace navigator with live per-path markers.

Keeps a path index over a workspace tree supplied by a loader, layers a
marker overlay on top that long-lived observers keep fresh, and tracks the
navigation state a tree widget needs (expansion, selection, requests).

Package entry point. Exports the version string only; the CLI imports its
collaborators lazily in main.py.
"""

__version__ = "0.1.0"
