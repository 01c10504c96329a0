# =============================================================================
# web/__init__.py
# =============================================================================
# The HTTP front end (app.py) and the tool-server supervisor
# (supervisor.py).  Like tools/, this is wiring only: every request is
# handed to core.operations.
# =============================================================================
