# Routes package init
"""
Devotionals API - API Routes Package
====================================

Route Inventory:
    - devotionals.py: GET/POST   /api/devotionals
                      GET/PATCH/DELETE /api/devotionals/{id}
    - users.py:       POST /api/users/register
    - health.py:      GET  /health, GET /hello_world

Design Principle:
    Routes are THIN: they extract request data, call a service, and choose
    the success status code. Business rules live in services.
"""
