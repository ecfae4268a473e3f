# Models package init
"""
Devotionals API - ORM Models
============================

    - devotional.py: Devotional (verse + commentary, soft-deletable)
    - user.py:       User (registration credentials)
"""
