"""
Brands module - Brand catalog management.

This module handles:
- Brand and BrandImage entities and domain logic
- Brand repository and image storage (ports)
- Brand commands, queries and handlers (application)
- Brand infrastructure (Django ORM and storage adapters)
"""
