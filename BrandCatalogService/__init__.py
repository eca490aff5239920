"""
Brand Catalog Service Django project.
"""
