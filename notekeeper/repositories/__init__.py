# Repositories package init
"""
NoteKeeper Backend - Repositories Layer
========================================

What:  Storage for notes behind one abstract contract.

Repository Inventory:
    - NoteRepository (abstract): the contract NoteService depends on
    - SqlAlchemyNoteRepository: async SQLAlchemy implementation
    - InMemoryNoteRepository: dict-backed implementation
"""
