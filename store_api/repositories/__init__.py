"""
Persistence adapters.

`table_storage` is the schemaless entity table (SQLAlchemy backed) and
`store_repository` maps stores onto it. Routers and scripts should depend on
StoreRepository rather than touching the table directly.
"""
