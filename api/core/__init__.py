"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every resource uses (storage handle,
error taxonomy, payload validation, owner-scoped document access). Keep
resource-specific rules and queries in the corresponding feature package
(e.g. `transactions/`).
"""
