"""Service layer: framework-agnostic use cases.

Import services from their modules (e.g.
:mod:`players_api.services.players.service`); this package deliberately
re-exports nothing so repositories can depend on
:mod:`players_api.services._shared.errors` without import cycles.
"""
