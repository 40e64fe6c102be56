# Services package init
"""
NoteKeep Backend — Services Layer
==================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Each service is built per request around that request's AsyncSession
       (see notekeep.dependencies) and only flushes; get_db_session commits.

Service Inventory:
    - UserService: registration, lookups, credential checks, account deletion
    - NoteService: note CRUD; trusts its caller on ownership
"""
