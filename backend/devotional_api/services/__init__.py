# Services package init
"""
Devotionals API - Services Layer
================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services accept an AsyncSession plus plain values, apply the rules, and
       return response schemas or raise application exceptions.

Service Inventory:
    - DevotionalService: create / get / list / partial update / soft delete
    - UserService:       account registration with bcrypt password hashes
"""
