"""
Paginated envelope for the brand list.
"""

from typing import Any, Dict

from rest_framework.request import Request
from rest_framework.utils.urls import replace_query_param

from api.v1.brands.serializers import BrandSummarySerializer
from brands.application.dto.brand_dto import BrandPageDTO


def _page_link(request: Request, page_dto: BrandPageDTO, page: int) -> Dict[str, str]:
    url = replace_query_param(request.get_full_path(), "page", page)
    return {"href": replace_query_param(url, "limit", page_dto.limit)}


def build_page_envelope(request: Request, page_dto: BrandPageDTO) -> Dict[str, Any]:
    """
    Wrap one page of brands in the list response envelope.

    Links are relative to the request and keep its sorting and
    criteria parameters.

    Args:
        request: The list request
        page_dto: Page returned by ListBrandsHandler

    Returns:
        Response body dictionary
    """
    links = {
        "self": _page_link(request, page_dto, page_dto.page),
        "first": _page_link(request, page_dto, 1),
        "last": _page_link(request, page_dto, page_dto.pages),
    }
    if page_dto.has_next:
        links["next"] = _page_link(request, page_dto, page_dto.page + 1)
    if page_dto.has_previous:
        links["previous"] = _page_link(request, page_dto, page_dto.page - 1)

    return {
        "page": page_dto.page,
        "limit": page_dto.limit,
        "pages": page_dto.pages,
        "total": page_dto.total,
        "_links": links,
        "_embedded": {
            "items": BrandSummarySerializer(page_dto.items, many=True).data,
        },
    }
