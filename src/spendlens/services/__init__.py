"""Service layer: authentication, ledger queries and analytics."""
