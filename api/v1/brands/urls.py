"""
URL configuration for brand API endpoints.
"""

from django.urls import path, re_path

from api.v1.brands import views

app_name = "brands"

urlpatterns = [
    re_path(
        r"^brands/?$",
        views.BrandCollectionView.as_view(),
        name="brand-list",
    ),
    path(
        "brands/<str:identifier>",
        views.BrandDetailView.as_view(),
        name="brand-detail",
    ),
]
