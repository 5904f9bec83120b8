"""
db/ - Database Layer
====================
PostgreSQL connection pool and the schema of the key-value state store.
Only repositories/ talks to this layer; the projection core never does.
"""
