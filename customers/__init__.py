"""
Customers module - purchaser identity records.

This module handles:
- Customer entity and domain logic
- Customer persistence model (Django ORM)
"""
