# Schemas package init
"""
Devotionals API - Pydantic Schemas
==================================

    - devotional.py: Devotional request/response contracts, error and health envelopes
    - user.py:       Registration request/response contracts
"""
