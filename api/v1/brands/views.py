"""
Brand API views.

These endpoints are used by catalog administrators to:
- List brands with pagination, sorting and filtering
- Show a brand by id or slug
- Create brands, with images uploaded as multipart file parts
- Partially or fully update and delete brands

Authentication happens in APIKeyAuthenticationMiddleware before
any of these views run.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.exceptions import violations_from_errors
from api.v1.brands.filters import parse_list_query
from api.v1.brands.pagination import build_page_envelope
from api.v1.brands.serializers import (
    BrandPageSerializer,
    BrandSerializer,
    CreateBrandRequestSerializer,
    UpdateBrandRequestSerializer,
    file_violations,
    renumber_image_violations,
    split_create_payload,
)
from brands.application.commands.create_brand import CreateBrandCommand, ImageUpload
from brands.application.commands.delete_brand import DeleteBrandCommand
from brands.application.commands.update_brand import UpdateBrandCommand
from brands.application.handlers.create_brand_handler import CreateBrandHandler
from brands.application.handlers.delete_brand_handler import DeleteBrandHandler
from brands.application.handlers.get_brand_handler import GetBrandHandler
from brands.application.handlers.list_brands_handler import ListBrandsHandler
from brands.application.handlers.update_brand_handler import UpdateBrandHandler
from brands.application.queries.get_brand import GetBrandQuery
from brands.infrastructure.repositories.django_brand_repository import DjangoBrandRepository
from brands.infrastructure.storage import DjangoImageStorage
from core.domain.exceptions import ValidationFailedError
from core.instrumentation import Status, StatusCode, get_tracer

# Initialize repositories (in production, use DI container)
_brand_repo = DjangoBrandRepository()
_image_storage = DjangoImageStorage()

tracer = get_tracer(__name__)

ERROR_RESPONSES = {
    401: {"description": "Unauthorized - Missing, invalid or expired API key"},
}
WRITE_ERROR_RESPONSES = {
    **ERROR_RESPONSES,
    400: {"description": "Validation failed"},
    403: {"description": "Forbidden - API key scope does not allow writes"},
}
IDENTIFIER_PARAMETER = OpenApiParameter(
    name="identifier",
    type=str,
    location=OpenApiParameter.PATH,
    description="Brand slug or numeric id",
)


class BrandCollectionView(APIView):
    """View for listing and creating brands."""

    parser_classes = [JSONParser, MultiPartParser, FormParser]

    @extend_schema(
        operation_id="list_brands",
        summary="List Brands",
        description=(
            "Paginated list of brands. Supports `page`, `limit`, "
            "`sorting[<field>]=asc|desc` and "
            "`criteria[<field>][type]` / `criteria[<field>][value]`."
        ),
        tags=["Brands"],
        parameters=[
            OpenApiParameter(name="page", type=int, location=OpenApiParameter.QUERY),
            OpenApiParameter(name="limit", type=int, location=OpenApiParameter.QUERY),
            OpenApiParameter(
                name="sorting",
                type=OpenApiTypes.OBJECT,
                location=OpenApiParameter.QUERY,
                style="deepObject",
                description="Sort keys: id, name, slug, created_at",
            ),
            OpenApiParameter(
                name="criteria",
                type=OpenApiTypes.OBJECT,
                location=OpenApiParameter.QUERY,
                style="deepObject",
                description="Filters on search, name, slug",
            ),
        ],
        responses={
            200: BrandPageSerializer,
            400: {"description": "Invalid list parameters"},
            **ERROR_RESPONSES,
        },
    )
    def get(self, request: Request) -> Response:
        """List brands."""
        return async_to_sync(self._handle_list_brands)(request)

    async def _handle_list_brands(self, request: Request) -> Response:
        """Async handler for list brands."""
        with tracer.start_as_current_span("list_brands") as span:
            span.set_attribute("operation", "list_brands")

            query = parse_list_query(request.query_params)
            span.set_attribute("page", query.page)
            span.set_attribute("limit", query.limit)
            span.set_attribute("criteria.count", len(query.criteria))
            span.set_attribute("sorting.count", len(query.sorting))

            handler = ListBrandsHandler(brand_repository=_brand_repo)
            result = await handler.handle(query)

            span.set_attribute("total", result.total)
            span.set_status(Status(StatusCode.OK))
            return Response(build_page_envelope(request, result), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="create_brand",
        summary="Create Brand",
        description=(
            "Create a brand. Send JSON, or a multipart form with `name`, `slug`, "
            "`images[<i>][type]` fields and `images[<i>][file]` file parts."
        ),
        tags=["Brands"],
        request={
            "application/json": CreateBrandRequestSerializer,
            "multipart/form-data": OpenApiTypes.OBJECT,
        },
        responses={201: BrandSerializer, **WRITE_ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Create a brand."""
        return async_to_sync(self._handle_create_brand)(request)

    async def _handle_create_brand(self, request: Request) -> Response:
        """Async handler for create brand."""
        with tracer.start_as_current_span("create_brand") as span:
            span.set_attribute("operation", "create_brand")

            payload, parts = split_create_payload(request.data, request.FILES)
            serializer = CreateBrandRequestSerializer(data=payload)
            violations = []
            if not serializer.is_valid():
                violations = renumber_image_violations(
                    violations_from_errors(serializer.errors), parts
                )
            violations.extend(file_violations(parts))
            if violations:
                span.set_attribute("error", "validation_failed")
                span.set_attribute("error.fields", ",".join(v.field for v in violations))
                span.set_status(Status(StatusCode.ERROR, "Validation failed"))
                raise ValidationFailedError(violations)

            command = CreateBrandCommand(
                name=serializer.validated_data["name"],
                slug=serializer.validated_data["slug"],
                images=[
                    ImageUpload(type=part["type"], content=part["file"], filename=part["file"].name)
                    for part in parts
                ],
            )
            span.set_attribute("brand.slug", command.slug)
            span.set_attribute("images.count", len(command.images))

            handler = CreateBrandHandler(brand_repository=_brand_repo, image_storage=_image_storage)
            result = await handler.handle(command)

            span.set_attribute("brand.id", result.id)
            span.set_status(Status(StatusCode.OK))
            return Response(BrandSerializer(result).data, status=status.HTTP_201_CREATED)


class BrandDetailView(APIView):
    """View for showing, updating and deleting one brand."""

    parser_classes = [JSONParser, MultiPartParser, FormParser]

    @extend_schema(
        operation_id="show_brand",
        summary="Show Brand",
        description="Fetch one brand by slug or numeric id. Products are not included.",
        tags=["Brands"],
        parameters=[IDENTIFIER_PARAMETER],
        responses={
            200: BrandSerializer,
            404: {"description": "Brand not found"},
            **ERROR_RESPONSES,
        },
    )
    def get(self, request: Request, identifier: str) -> Response:
        """Show a brand."""
        return async_to_sync(self._handle_show_brand)(request, identifier)

    async def _handle_show_brand(self, request: Request, identifier: str) -> Response:
        """Async handler for show brand."""
        with tracer.start_as_current_span("show_brand") as span:
            span.set_attribute("operation", "show_brand")
            span.set_attribute("brand.identifier", identifier)

            handler = GetBrandHandler(brand_repository=_brand_repo)
            result = await handler.handle(GetBrandQuery(identifier=identifier))

            span.set_attribute("brand.id", result.id)
            span.set_status(Status(StatusCode.OK))
            return Response(BrandSerializer(result).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="replace_brand",
        summary="Update Brand",
        description="Replace name and slug of a brand. Both fields are required.",
        tags=["Brands"],
        parameters=[IDENTIFIER_PARAMETER],
        request=UpdateBrandRequestSerializer,
        responses={
            204: None,
            404: {"description": "Brand not found"},
            **WRITE_ERROR_RESPONSES,
        },
    )
    def put(self, request: Request, identifier: str) -> Response:
        """Fully update a brand."""
        return async_to_sync(self._handle_update_brand)(request, identifier, partial=False)

    @extend_schema(
        operation_id="update_brand",
        summary="Partially Update Brand",
        description="Change only the supplied fields of a brand. An empty body changes nothing.",
        tags=["Brands"],
        parameters=[IDENTIFIER_PARAMETER],
        request=UpdateBrandRequestSerializer(partial=True),
        responses={
            204: None,
            404: {"description": "Brand not found"},
            **WRITE_ERROR_RESPONSES,
        },
    )
    def patch(self, request: Request, identifier: str) -> Response:
        """Partially update a brand."""
        return async_to_sync(self._handle_update_brand)(request, identifier, partial=True)

    async def _handle_update_brand(
        self, request: Request, identifier: str, partial: bool
    ) -> Response:
        """Async handler for partial and full brand updates."""
        with tracer.start_as_current_span("update_brand") as span:
            span.set_attribute("operation", "update_brand")
            span.set_attribute("brand.identifier", identifier)
            span.set_attribute("partial", partial)

            serializer = UpdateBrandRequestSerializer(data=request.data, partial=partial)
            if serializer.is_valid():
                command = UpdateBrandCommand(
                    identifier=identifier,
                    name=serializer.validated_data.get("name"),
                    slug=serializer.validated_data.get("slug"),
                    partial=partial,
                )
            else:
                span.set_attribute("error", "validation_failed")
                command = UpdateBrandCommand(
                    identifier=identifier,
                    partial=partial,
                    violations=violations_from_errors(serializer.errors),
                )

            handler = UpdateBrandHandler(brand_repository=_brand_repo)
            result = await handler.handle(command)

            span.set_attribute("brand.id", result.id)
            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="delete_brand",
        summary="Delete Brand",
        description=(
            "Delete a brand together with its images. "
            "Products of the brand are kept with their brand cleared."
        ),
        tags=["Brands"],
        parameters=[IDENTIFIER_PARAMETER],
        responses={
            204: None,
            404: {"description": "Brand not found"},
            **WRITE_ERROR_RESPONSES,
        },
    )
    def delete(self, request: Request, identifier: str) -> Response:
        """Delete a brand."""
        return async_to_sync(self._handle_delete_brand)(request, identifier)

    async def _handle_delete_brand(self, request: Request, identifier: str) -> Response:
        """Async handler for delete brand."""
        with tracer.start_as_current_span("delete_brand") as span:
            span.set_attribute("operation", "delete_brand")
            span.set_attribute("brand.identifier", identifier)

            handler = DeleteBrandHandler(brand_repository=_brand_repo, image_storage=_image_storage)
            await handler.handle(DeleteBrandCommand(identifier=identifier))

            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)
