"""
Notes API — Services Layer
===========================

Service Inventory:
    - NoteStore (abstract) / SQLAlchemyNoteStore: persistence of Note rows
    - CacheBackend (abstract) / RedisCacheService: key-value cache with TTL
    - NoteService: cache-aside orchestration over a store and a cache
"""
