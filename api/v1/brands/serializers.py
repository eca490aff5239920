"""
Serializers for Brand API endpoints.
"""

import dataclasses
import re
from collections import defaultdict
from typing import Any, Dict, List, Mapping, Tuple

from django.core.files.uploadedfile import UploadedFile
from django.urls import reverse
from rest_framework import serializers

from brands.domain.image import IMAGE_TYPE_MAX_LENGTH
from core.domain.exceptions import FieldViolation
from core.domain.value_objects import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    SLUG_MAX_LENGTH,
    SLUG_MIN_LENGTH,
)

IMAGE_PART = re.compile(r"^images\[(\d+)\]\[(type|file)\]$")
IMAGE_PATH = re.compile(r"^images\[(\d+)\]")


class ImageDescriptorSerializer(serializers.Serializer):
    """Serializer for one image descriptor of a create request."""

    type = serializers.CharField(max_length=IMAGE_TYPE_MAX_LENGTH)


class CreateBrandRequestSerializer(serializers.Serializer):
    """Serializer for create brand request."""

    name = serializers.CharField(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    slug = serializers.SlugField(min_length=SLUG_MIN_LENGTH, max_length=SLUG_MAX_LENGTH)
    images = ImageDescriptorSerializer(many=True, required=False)


class UpdateBrandRequestSerializer(serializers.Serializer):
    """
    Serializer for update brand request.

    Bound with ``partial=True`` for PATCH, so absent fields are
    left untouched; PUT requires both.
    """

    name = serializers.CharField(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    slug = serializers.SlugField(min_length=SLUG_MIN_LENGTH, max_length=SLUG_MAX_LENGTH)


class BrandImageSerializer(serializers.Serializer):
    """Serializer for BrandImageDTO."""

    id = serializers.IntegerField()
    type = serializers.CharField()
    path = serializers.CharField()


class BrandSerializer(serializers.Serializer):
    """Serializer for BrandDTO (show and create responses)."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    slug = serializers.CharField()
    images = BrandImageSerializer(many=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class BrandSummarySerializer(serializers.Serializer):
    """Serializer for a brand list item."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    slug = serializers.CharField()
    _links = serializers.SerializerMethodField(method_name="get_links")

    def get_links(self, obj) -> Dict[str, Dict[str, str]]:
        return {
            "self": {"href": reverse("brands:brand-detail", kwargs={"identifier": obj.slug})}
        }


class BrandPageSerializer(serializers.Serializer):
    """Schema-only serializer for the paginated brand list envelope."""

    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    pages = serializers.IntegerField()
    total = serializers.IntegerField()
    _links = serializers.DictField(child=serializers.DictField())
    _embedded = serializers.DictField(child=BrandSummarySerializer(many=True))


def split_create_payload(
    data: Any, files: Mapping
) -> Tuple[Any, List[Dict[str, Any]]]:
    """
    Separate a create request into serializer input and image parts.

    JSON bodies carry ``images`` as a list of descriptors. Multipart
    bodies carry ``images[<i>][type]`` fields and ``images[<i>][file]``
    parts, paired by index and ordered by it. An ``images`` value that
    is not a list is passed through for the serializer to reject.

    Args:
        data: ``request.data``
        files: ``request.FILES``

    Returns:
        Tuple of (serializer input, image parts in submitted order);
        each part has the submitted ``index`` and may hold a ``type``
        and a ``file``
    """
    if not isinstance(data, Mapping):
        return data, []

    parts: Dict[int, Dict[str, Any]] = defaultdict(dict)
    descriptors = data.get("images")
    if isinstance(descriptors, list):
        for index, descriptor in enumerate(descriptors):
            part = parts[index]
            if isinstance(descriptor, Mapping):
                part.update({key: descriptor[key] for key in ("type", "file") if key in descriptor})

    for key in data.keys():
        match = IMAGE_PART.match(key)
        if match and key not in files:
            parts[int(match.group(1))][match.group(2)] = data.get(key)
    for key in files.keys():
        match = IMAGE_PART.match(key)
        if match and match.group(2) == "file":
            parts[int(match.group(1))]["file"] = files.get(key)

    ordered = [dict(parts[index], index=index) for index in sorted(parts)]
    payload = {key: data.get(key) for key in ("name", "slug") if key in data}
    if "images" in data and not isinstance(descriptors, list):
        payload["images"] = descriptors
    elif ordered:
        payload["images"] = [
            {"type": part["type"]} if "type" in part else {} for part in ordered
        ]
    return payload, ordered


def renumber_image_violations(
    violations: List[FieldViolation], parts: List[Dict[str, Any]]
) -> List[FieldViolation]:
    """Rewrite ``images[<position>]`` paths to the index the client submitted."""

    def submitted(match):
        return f"images[{parts[int(match.group(1))]['index']}]"

    return [
        dataclasses.replace(violation, field=IMAGE_PATH.sub(submitted, violation.field))
        for violation in violations
    ]


def file_violations(parts: List[Dict[str, Any]]) -> List[FieldViolation]:
    """Violations for image parts whose file is missing or is not an upload."""
    violations = []
    for part in parts:
        upload = part.get("file")
        field = f"images[{part['index']}].file"
        if upload is None:
            violations.append(FieldViolation(field, "required", "An image file is required."))
        elif not isinstance(upload, UploadedFile):
            violations.append(
                FieldViolation(field, "invalid", "The submitted data was not a file.")
            )
    return violations
