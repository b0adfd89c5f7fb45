# Services package init
"""
Bookmarks Service — Services Layer
====================================

What:  Business logic between routes (HTTP) and storage (persistence).

Service Inventory:
    - validation: validate_create / validate_patch, pure field rules
    - sanitizer: sanitize_text, idempotent markup neutralization
    - BookmarkService: existence checks, orchestration, audit logging

Services never touch SQLAlchemy or HTTP objects; they receive a
BookmarkStore and raise application exceptions.
"""
