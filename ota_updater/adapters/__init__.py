"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations of the domain ports: the update-check REST
    gateway and its offline mock, the region carrier table, device
    identification, and local settings storage.

Dependencies:
    ``requests`` for HTTP, ``subprocess`` for device properties, the
    filesystem for settings, and the protocol definitions in
    ``ota_updater.domain.ports``.

Call context:
    Imported by ``ota_updater.app`` for runtime wiring and by tests for
    transport-level behavior verification.
"""
