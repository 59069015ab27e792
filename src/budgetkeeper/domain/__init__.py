"""Domain layer for budgetkeeper application.

Services are imported from their own modules (e.g.
``budgetkeeper.domain.transaction``); this package stays import-light so the
database layer can depend on ``budgetkeeper.domain.entities``.
"""
