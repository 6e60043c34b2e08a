"""ViewModel package for UI state and command surfaces.

Call context:
    ``ota_updater/app/main.py`` imports the concrete viewmodels from this
    package to bind view callbacks to session operations.

Dependencies:
    Domain types, the ``QuerySession`` facade, and formatting helpers only.
    Adapters and transport stay outside.

Responsibilities:
    - Expose UI state (field values, dropdown indices, busy flag).
    - Turn query outcomes into display rows.
    - Coerce and validate persisted settings.
"""
