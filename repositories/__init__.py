"""
repositories/ - Data Access Layer
==================================
Persistence collaborator. The finance state is stored as one opaque JSON
blob per key; repositories return domain objects, never raw rows.
"""
