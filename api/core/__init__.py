"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks every resource package uses: DB
wiring, generic table access, errors, uploads, mail and migrations. Table
declarations, finders and business rules live in the resource's own package
(e.g. `agency/`, `settings/`).
"""
