"""
db/ - Database Layer
====================
Owns the PostgreSQL connection pool, the schema bootstrap, and the generic
select/insert/delete executor. This layer is the lowest in the architecture
and has no dependencies on other layers.
"""
