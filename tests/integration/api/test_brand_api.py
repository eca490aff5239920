"""
Integration tests for Brand API endpoints.
"""

import os

import pytest
from django.urls import reverse

from brands.infrastructure.models import Brand, BrandImage
from products.infrastructure.models import Product


def brand_url(identifier=""):
    if identifier == "":
        return reverse("brands:brand-list")
    return reverse("brands:brand-detail", kwargs={"identifier": str(identifier)})


def violation_map(response):
    """Map field -> code for a validation failure response."""
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    return {violation["field"]: violation["code"] for violation in error["violations"]}


@pytest.mark.django_db
@pytest.mark.integration
class TestAuthentication:
    """Every brand route is closed to callers without a valid key."""

    @pytest.mark.parametrize(
        "method, identifier",
        [
            ("get", ""),
            ("post", ""),
            ("get", "sylius"),
            ("put", "sylius"),
            ("patch", "sylius"),
            ("delete", "sylius"),
        ],
    )
    def test_missing_credentials_denied(self, api_client, demo_brands, method, identifier):
        response = getattr(api_client, method)(brand_url(identifier), {}, format="json")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "ACCESS_DENIED"

    def test_unknown_key_denied_before_not_found(self, api_client):
        response = api_client.get(brand_url(-1), HTTP_AUTHORIZATION="Bearer not-a-real-key")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "ACCESS_DENIED"

    def test_unknown_key_denied_before_validation(self, api_client):
        response = api_client.post(
            brand_url(), {}, format="json", HTTP_AUTHORIZATION="Bearer not-a-real-key"
        )

        assert response.status_code == 401

    def test_expired_key_denied(self, api_client, expired_api_key):
        response = api_client.get(brand_url(), HTTP_AUTHORIZATION=f"Bearer {expired_api_key}")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "ACCESS_DENIED"

    def test_x_api_key_header_accepted(self, api_client, full_api_key, demo_brands):
        response = api_client.get(brand_url(), HTTP_X_API_KEY=full_api_key)

        assert response.status_code == 200

    def test_read_scope_can_list_and_show(self, api_client, read_api_key, demo_brands):
        headers = {"HTTP_AUTHORIZATION": f"Bearer {read_api_key}"}

        assert api_client.get(brand_url(), **headers).status_code == 200
        assert api_client.get(brand_url("sylius"), **headers).status_code == 200

    @pytest.mark.parametrize("method", ["post", "put", "patch", "delete"])
    def test_read_scope_cannot_write(self, api_client, read_api_key, demo_brands, method):
        url = brand_url() if method == "post" else brand_url("sylius")
        response = getattr(api_client, method)(
            url,
            {"name": "Changed", "slug": "changed"},
            format="json",
            HTTP_AUTHORIZATION=f"Bearer {read_api_key}",
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "INSUFFICIENT_SCOPE"
        assert Brand.objects.filter(slug="sylius").exists()

    def test_health_needs_no_key(self, api_client):
        response = api_client.get("/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


@pytest.mark.django_db
@pytest.mark.integration
class TestListBrands:
    """Tests for GET /api/v1/brands."""

    def test_list_all(self, api_client, auth_headers, demo_brands):
        response = api_client.get(brand_url(), **auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1
        assert data["limit"] == 10
        assert data["pages"] == 1
        assert data["total"] == 3
        items = data["_embedded"]["items"]
        assert [item["slug"] for item in items] == ["sylius", "symfony", "setono"]
        assert items[0] == {
            "id": demo_brands["sylius"].id,
            "name": "Sylius",
            "slug": "sylius",
            "_links": {"self": {"href": "/api/v1/brands/sylius"}},
        }
        assert "next" not in data["_links"]
        assert "previous" not in data["_links"]

    def test_collection_path_without_trailing_slash(self, api_client, auth_headers, demo_brands):
        response = api_client.get("/api/v1/brands", **auth_headers)

        assert response.status_code == 200
        assert response.json()["total"] == 3

    def test_empty_catalog(self, api_client, auth_headers):
        data = api_client.get(brand_url(), **auth_headers).json()

        assert data["total"] == 0
        assert data["pages"] == 1
        assert data["_embedded"]["items"] == []

    def test_paginate_and_limit(self, api_client, auth_headers, many_brands):
        response = api_client.get(brand_url(), {"page": 2, "limit": 3}, **auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 2
        assert data["limit"] == 3
        assert data["pages"] == 4
        assert data["total"] == 10
        assert [item["slug"] for item in data["_embedded"]["items"]] == [
            "brand-04",
            "brand-05",
            "brand-06",
        ]
        assert "page=3" in data["_links"]["next"]["href"]
        assert "page=1" in data["_links"]["previous"]["href"]
        assert "page=4" in data["_links"]["last"]["href"]

    def test_page_past_the_end_is_empty(self, api_client, auth_headers, many_brands):
        data = api_client.get(brand_url(), {"page": 9, "limit": 5}, **auth_headers).json()

        assert data["_embedded"]["items"] == []
        assert data["total"] == 10

    def test_largest_page_is_empty(self, api_client, auth_headers, demo_brands):
        page = (2**63 - 1) // 10 + 1
        response = api_client.get(brand_url(), {"page": page, "limit": 10}, **auth_headers)

        assert response.status_code == 200
        assert response.json()["_embedded"]["items"] == []

    def test_limit_is_capped(self, api_client, auth_headers, demo_brands):
        data = api_client.get(brand_url(), {"limit": 1000}, **auth_headers).json()

        assert data["limit"] == 100

    def test_sort_by_slug_descending(self, api_client, auth_headers, demo_brands):
        response = api_client.get(brand_url(), {"sorting[slug]": "desc"}, **auth_headers)

        assert response.status_code == 200
        slugs = [item["slug"] for item in response.json()["_embedded"]["items"]]
        assert slugs == ["symfony", "sylius", "setono"]

    def test_sort_by_name_ascending(self, api_client, auth_headers, demo_brands):
        response = api_client.get(brand_url(), {"sorting[name]": "asc"}, **auth_headers)

        names = [item["name"] for item in response.json()["_embedded"]["items"]]
        assert names == ["Setono", "Sylius", "Symfony"]

    def test_filter_search_contains(self, api_client, auth_headers, demo_brands):
        response = api_client.get(
            brand_url(),
            {"criteria[search][type]": "contains", "criteria[search][value]": "sylius"},
            **auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["_embedded"]["items"][0]["slug"] == "sylius"

    def test_filter_is_case_insensitive(self, api_client, auth_headers, demo_brands):
        data = api_client.get(
            brand_url(), {"criteria[name][value]": "SYM"}, **auth_headers
        ).json()

        assert [item["slug"] for item in data["_embedded"]["items"]] == ["symfony"]

    def test_filter_shorthand_and_negation(self, api_client, auth_headers, demo_brands):
        shorthand = api_client.get(brand_url(), {"criteria[slug]": "sy"}, **auth_headers).json()
        negated = api_client.get(
            brand_url(),
            {"criteria[slug][type]": "not_contains", "criteria[slug][value]": "sy"},
            **auth_headers,
        ).json()

        assert shorthand["total"] == 2
        assert [item["slug"] for item in negated["_embedded"]["items"]] == ["setono"]

    def test_filter_starts_with(self, api_client, auth_headers, demo_brands):
        data = api_client.get(
            brand_url(),
            {"criteria[search][type]": "starts_with", "criteria[search][value]": "se"},
            **auth_headers,
        ).json()

        assert [item["slug"] for item in data["_embedded"]["items"]] == ["setono"]

    def test_filter_and_sort_combined(self, api_client, auth_headers, demo_brands):
        data = api_client.get(
            brand_url(),
            {
                "criteria[search][value]": "sy",
                "sorting[slug]": "desc",
            },
            **auth_headers,
        ).json()

        assert [item["slug"] for item in data["_embedded"]["items"]] == ["symfony", "sylius"]

    def test_pagination_links_keep_filters(self, api_client, auth_headers, many_brands):
        data = api_client.get(
            brand_url(),
            {"limit": 2, "criteria[search][value]": "brand"},
            **auth_headers,
        ).json()

        assert "criteria" in data["_links"]["next"]["href"]

    @pytest.mark.parametrize(
        "params, field, code",
        [
            ({"page": 0}, "page", "min_value"),
            ({"page": "abc"}, "page", "invalid"),
            ({"page": "99999999999999999999"}, "page", "max_value"),
            ({"limit": -5}, "limit", "min_value"),
            ({"sorting[color]": "asc"}, "sorting[color]", "invalid_choice"),
            ({"sorting[slug]": "sideways"}, "sorting[slug]", "invalid_choice"),
            ({"criteria[color][value]": "red"}, "criteria[color]", "invalid_choice"),
            (
                {"criteria[name][type]": "like", "criteria[name][value]": "x"},
                "criteria[name][type]",
                "invalid_choice",
            ),
        ],
    )
    def test_malformed_parameters(self, api_client, auth_headers, params, field, code):
        response = api_client.get(brand_url(), params, **auth_headers)

        assert response.status_code == 400
        assert violation_map(response) == {field: code}


@pytest.mark.django_db
@pytest.mark.integration
class TestShowBrand:
    """Tests for GET /api/v1/brands/{identifier}."""

    def test_show_by_slug(self, api_client, auth_headers, demo_brands):
        response = api_client.get(brand_url("setono"), **auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == demo_brands["setono"].id
        assert data["name"] == "Setono"
        assert data["slug"] == "setono"
        assert data["images"] == []
        assert data["created_at"]
        assert data["updated_at"]

    def test_show_by_id(self, api_client, auth_headers, demo_brands):
        response = api_client.get(brand_url(demo_brands["symfony"].id), **auth_headers)

        assert response.status_code == 200
        assert response.json()["slug"] == "symfony"

    def test_products_not_expanded(self, api_client, auth_headers, demo_brands):
        data = api_client.get(brand_url("sylius"), **auth_headers).json()

        assert "products" not in data

    def test_slug_takes_precedence_over_id(self, api_client, auth_headers):
        Brand.objects.create(id=4242, name="By Id", slug="by-id")
        Brand.objects.create(name="By Slug", slug="4242")

        response = api_client.get(brand_url("4242"), **auth_headers)

        assert response.json()["name"] == "By Slug"

    @pytest.mark.parametrize("identifier", ["-1", "0", "no-such-brand", "999999"])
    def test_not_found(self, api_client, auth_headers, demo_brands, identifier):
        response = api_client.get(brand_url(identifier), **auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "BRAND_NOT_FOUND"

    def test_responses_carry_correlation_id(self, api_client, auth_headers, demo_brands):
        response = api_client.get(
            brand_url("sylius"), HTTP_X_CORRELATION_ID="abc-123", **auth_headers
        )

        assert response["X-Correlation-ID"] == "abc-123"


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateBrand:
    """Tests for POST /api/v1/brands."""

    def test_empty_body_reports_every_required_field(self, api_client, auth_headers):
        response = api_client.post(brand_url(), {}, format="json", **auth_headers)

        assert response.status_code == 400
        assert violation_map(response) == {"name": "required", "slug": "required"}

    def test_too_long_name_and_slug(self, api_client, auth_headers):
        response = api_client.post(
            brand_url(), {"name": "n" * 192, "slug": "s" * 192}, format="json", **auth_headers
        )

        assert response.status_code == 400
        assert violation_map(response) == {"name": "max_length", "slug": "max_length"}

    def test_too_short_name(self, api_client, auth_headers):
        response = api_client.post(
            brand_url(), {"name": "a", "slug": "php"}, format="json", **auth_headers
        )

        assert response.status_code == 400
        assert violation_map(response) == {"name": "min_length"}

    def test_blank_slug(self, api_client, auth_headers):
        response = api_client.post(
            brand_url(), {"name": "PHP", "slug": "   "}, format="json", **auth_headers
        )

        assert violation_map(response) == {"slug": "blank"}

    def test_create(self, api_client, auth_headers):
        response = api_client.post(
            brand_url(), {"name": "PHP", "slug": "php"}, format="json", **auth_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "PHP"
        assert data["slug"] == "php"
        assert data["images"] == []
        assert Brand.objects.get(slug="php").id == data["id"]

    def test_created_brand_is_shown(self, api_client, auth_headers):
        created = api_client.post(
            brand_url(), {"name": "PHP", "slug": "php"}, format="json", **auth_headers
        ).json()

        shown = api_client.get(brand_url("php"), **auth_headers).json()

        assert shown == created

    def test_duplicate_slug(self, api_client, auth_headers, demo_brands):
        response = api_client.post(
            brand_url(), {"name": "Another Sylius", "slug": "sylius"}, format="json", **auth_headers
        )

        assert response.status_code == 400
        assert violation_map(response) == {"slug": "unique"}
        assert Brand.objects.filter(slug="sylius").count() == 1

    def test_create_with_images(self, api_client, auth_headers, png_upload, media_root):
        response = api_client.post(
            brand_url(),
            {
                "name": "PHP",
                "slug": "php",
                "images[0][type]": "logo",
                "images[0][file]": png_upload("php-logo.png"),
                "images[1][type]": "logo",
                "images[1][file]": png_upload("php-logo-transparent-background.png"),
            },
            format="multipart",
            **auth_headers,
        )

        assert response.status_code == 201
        images = response.json()["images"]
        assert [image["type"] for image in images] == ["logo", "logo"]
        assert "php-logo-transparent-background" not in images[0]["path"]
        assert "php-logo-transparent-background" in images[1]["path"]
        for image in images:
            assert image["path"].startswith("brands/images/")
            assert os.path.exists(os.path.join(media_root, image["path"]))
        assert BrandImage.objects.filter(brand__slug="php").count() == 2

    def test_image_descriptor_without_file(self, api_client, auth_headers):
        response = api_client.post(
            brand_url(),
            {"name": "PHP", "slug": "php", "images[0][type]": "logo"},
            format="multipart",
            **auth_headers,
        )

        assert response.status_code == 400
        assert violation_map(response) == {"images[0].file": "required"}
        assert not Brand.objects.filter(slug="php").exists()

    def test_json_descriptors_need_files(self, api_client, auth_headers):
        response = api_client.post(
            brand_url(),
            {"name": "PHP", "slug": "php", "images": [{"type": "logo"}, {"type": "logo"}]},
            format="json",
            **auth_headers,
        )

        assert violation_map(response) == {"images[0].file": "required", "images[1].file": "required"}

    def test_file_without_descriptor(self, api_client, auth_headers, png_upload):
        response = api_client.post(
            brand_url(),
            {"name": "PHP", "slug": "php", "images[0][file]": png_upload()},
            format="multipart",
            **auth_headers,
        )

        assert violation_map(response) == {"images[0].type": "required"}

    def test_json_file_value_rejected(self, api_client, auth_headers):
        response = api_client.post(
            brand_url(),
            {"name": "PHP", "slug": "php", "images": [{"type": "logo", "file": "x"}]},
            format="json",
            **auth_headers,
        )

        assert response.status_code == 400
        assert violation_map(response) == {"images[0].file": "invalid"}
        assert not Brand.objects.filter(slug="php").exists()

    def test_images_must_be_a_list(self, api_client, auth_headers):
        response = api_client.post(
            brand_url(), {"name": "PHP", "slug": "php", "images": "logo"}, format="json", **auth_headers
        )

        assert response.status_code == 400
        assert violation_map(response) == {"images": "not_a_list"}
        assert not Brand.objects.filter(slug="php").exists()

    def test_violations_name_submitted_image_index(self, api_client, auth_headers, png_upload):
        response = api_client.post(
            brand_url(),
            {
                "name": "PHP",
                "slug": "php",
                "images[0][type]": "logo",
                "images[0][file]": png_upload(),
                "images[5][type]": "banner",
            },
            format="multipart",
            **auth_headers,
        )

        assert violation_map(response) == {"images[5].file": "required"}

    @pytest.mark.parametrize("slug", ["a/b", "two words", "caf\u00e9"])
    def test_slug_must_fit_a_url_segment(self, api_client, auth_headers, demo_brands, slug):
        response = api_client.post(
            brand_url(), {"name": "Slashy", "slug": slug}, format="json", **auth_headers
        )

        assert response.status_code == 400
        assert violation_map(response) == {"slug": "invalid"}
        assert api_client.get(brand_url(), **auth_headers).status_code == 200

    def test_failed_create_stores_no_files(self, api_client, auth_headers, png_upload, media_root, demo_brands):
        response = api_client.post(
            brand_url(),
            {
                "name": "Sylius again",
                "slug": "sylius",
                "images[0][type]": "logo",
                "images[0][file]": png_upload(),
            },
            format="multipart",
            **auth_headers,
        )

        assert response.status_code == 400
        upload_dir = media_root / "brands" / "images"
        assert not upload_dir.exists() or not any(upload_dir.iterdir())


@pytest.mark.django_db
@pytest.mark.integration
class TestUpdateBrand:
    """Tests for PATCH and PUT /api/v1/brands/{identifier}."""

    def test_partial_update(self, api_client, auth_headers, demo_brands):
        response = api_client.patch(
            brand_url("symfony"), {"name": "Symfony Framework"}, format="json", **auth_headers
        )

        assert response.status_code == 204
        data = api_client.get(brand_url("symfony"), **auth_headers).json()
        assert data["name"] == "Symfony Framework"
        assert data["slug"] == "symfony"

    def test_partial_update_by_id(self, api_client, auth_headers, demo_brands):
        response = api_client.patch(
            brand_url(demo_brands["setono"].id), {"slug": "setono-io"}, format="json", **auth_headers
        )

        assert response.status_code == 204
        assert Brand.objects.get(id=demo_brands["setono"].id).slug == "setono-io"

    def test_empty_partial_update_changes_nothing(self, api_client, auth_headers, demo_brands):
        response = api_client.patch(brand_url("sylius"), {}, format="json", **auth_headers)

        assert response.status_code == 204
        brand = Brand.objects.get(slug="sylius")
        assert brand.name == "Sylius"
        assert brand.updated_at == demo_brands["sylius"].updated_at

    def test_partial_update_invalid_field(self, api_client, auth_headers, demo_brands):
        response = api_client.patch(brand_url("sylius"), {"name": "x"}, format="json", **auth_headers)

        assert response.status_code == 400
        assert violation_map(response) == {"name": "min_length"}

    def test_update_rejects_slug_outside_url_alphabet(self, api_client, auth_headers, demo_brands):
        response = api_client.patch(
            brand_url("sylius"), {"slug": "a/b"}, format="json", **auth_headers
        )

        assert response.status_code == 400
        assert violation_map(response) == {"slug": "invalid"}
        assert Brand.objects.filter(slug="sylius").exists()

    def test_partial_update_not_found_before_validation(self, api_client, auth_headers):
        response = api_client.patch(brand_url(-1), {"name": "x"}, format="json", **auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "BRAND_NOT_FOUND"

    def test_full_update_changes_slug(self, api_client, auth_headers, demo_brands):
        response = api_client.put(
            brand_url("symfony"),
            {"name": "Updated Name", "slug": "updated-slug"},
            format="json",
            **auth_headers,
        )

        assert response.status_code == 204
        data = api_client.get(brand_url("updated-slug"), **auth_headers).json()
        assert data["id"] == demo_brands["symfony"].id
        assert data["name"] == "Updated Name"
        assert api_client.get(brand_url("symfony"), **auth_headers).status_code == 404

    def test_full_update_requires_both_fields(self, api_client, auth_headers, demo_brands):
        response = api_client.put(
            brand_url("symfony"), {"name": "Updated Name"}, format="json", **auth_headers
        )

        assert response.status_code == 400
        assert violation_map(response) == {"slug": "required"}

    def test_full_update_duplicate_slug(self, api_client, auth_headers, demo_brands):
        response = api_client.put(
            brand_url("symfony"), {"name": "Symfony", "slug": "sylius"}, format="json", **auth_headers
        )

        assert response.status_code == 400
        assert violation_map(response) == {"slug": "unique"}

    def test_full_update_keeping_own_slug(self, api_client, auth_headers, demo_brands):
        response = api_client.put(
            brand_url("symfony"), {"name": "Symfony 7", "slug": "symfony"}, format="json", **auth_headers
        )

        assert response.status_code == 204

    def test_full_update_not_found(self, api_client, auth_headers):
        response = api_client.put(
            brand_url("no-such-brand"), {"name": "Name", "slug": "slug"}, format="json", **auth_headers
        )

        assert response.status_code == 404

    def test_show_after_update_is_not_stale(self, api_client, auth_headers, demo_brands):
        assert api_client.get(brand_url("sylius"), **auth_headers).json()["name"] == "Sylius"

        api_client.patch(brand_url("sylius"), {"name": "Sylius Stack"}, format="json", **auth_headers)

        assert api_client.get(brand_url("sylius"), **auth_headers).json()["name"] == "Sylius Stack"


@pytest.mark.django_db
@pytest.mark.integration
class TestDeleteBrand:
    """Tests for DELETE /api/v1/brands/{identifier}."""

    def test_delete(self, api_client, auth_headers, demo_brands):
        response = api_client.delete(brand_url("setono"), **auth_headers)

        assert response.status_code == 204
        assert api_client.get(brand_url("setono"), **auth_headers).status_code == 404

    def test_delete_not_found(self, api_client, auth_headers, demo_brands):
        response = api_client.delete(brand_url(-1), **auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "BRAND_NOT_FOUND"
        assert Brand.objects.count() == 3

    def test_delete_keeps_products(self, api_client, auth_headers, demo_brands):
        api_client.delete(brand_url("sylius"), **auth_headers)

        product = Product.objects.get(slug="sylius-plus")
        assert product.brand is None

    def test_delete_removes_images(self, api_client, auth_headers, png_upload, media_root):
        created = api_client.post(
            brand_url(),
            {
                "name": "PHP",
                "slug": "php",
                "images[0][type]": "logo",
                "images[0][file]": png_upload(),
            },
            format="multipart",
            **auth_headers,
        ).json()
        stored = os.path.join(media_root, created["images"][0]["path"])
        assert os.path.exists(stored)

        response = api_client.delete(brand_url(created["id"]), **auth_headers)

        assert response.status_code == 204
        assert not os.path.exists(stored)
        assert not BrandImage.objects.exists()

    def test_delete_after_show_clears_cache(self, api_client, auth_headers, demo_brands):
        api_client.get(brand_url("symfony"), **auth_headers)

        api_client.delete(brand_url("symfony"), **auth_headers)

        assert api_client.get(brand_url("symfony"), **auth_headers).status_code == 404
