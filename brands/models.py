"""
Model registry for the brands app.

Django discovers models through ``<app>.models``; the
definitions live in the infrastructure layer.
"""

from brands.infrastructure.models import Brand, BrandImage  # noqa: F401
