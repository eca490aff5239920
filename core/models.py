"""
Model registry for the core app.
"""

from core.infrastructure.models import ApiKey  # noqa: F401
