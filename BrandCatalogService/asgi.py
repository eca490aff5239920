"""
ASGI config for BrandCatalogService project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "BrandCatalogService.settings.prod")

application = get_asgi_application()
