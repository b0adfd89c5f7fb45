# Routes package init
"""
Bookmarks Service — API Routes Package
========================================

Route Inventory:
    - bookmarks.py: GET/POST /bookmarks, GET/DELETE/PATCH /bookmarks/{id}
    - health.py:    GET /health

Routes stay thin: extract path/body, call BookmarkService, set status and
headers. Validation and lifecycle rules live in the services layer.
"""
