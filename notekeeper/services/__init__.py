# Services package init
"""
NoteKeeper Backend - Services Layer
====================================

What:  Business logic between routes (HTTP) and repositories (persistence).
How:   Services take plain arguments and domain objects, apply the note
       rules, and return domain objects. They're injected into routes via
       FastAPI's dependency injection.

Service Inventory:
    - NoteService: note lifecycle (create, update, delete, get, list, stats)
    - word_stats.word_frequencies: pure text → word-count table function
"""
