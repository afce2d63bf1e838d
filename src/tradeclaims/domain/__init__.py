"""Domain layer for tradeclaims application.

Services are imported from their modules directly; the database layer imports
domain entities, so this package stays free of service imports.
"""
