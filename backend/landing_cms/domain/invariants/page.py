from typing import Any, Dict, Iterable
from .block import validate_layout
from landing_cms.domain.exceptions import ValidationError

SEO_FIELDS = ("meta_title", "meta_description", "meta_keywords", "og_image")


def _check_seo(seo: Any, errors: Dict[str, str]) -> None:
    if seo is None:
        return
    if not isinstance(seo, dict):
        errors["seo"] = "must be an object"
        return
    for key, value in seo.items():
        if key not in SEO_FIELDS:
            errors[f"seo.{key}"] = "unknown field"
        elif value is not None and not isinstance(value, str):
            errors[f"seo.{key}"] = "must be a string"


def assert_page_payload(
    data: Dict[str, Any],
    *,
    supported_locales: Iterable[str],
    partial: bool = False,
) -> None:
    """
    Validate page input and raise ValidationError with per-field messages.

    ``partial`` is used for updates, where only provided fields are checked
    and slug/locale are not accepted.
    """
    errors: Dict[str, str] = {}

    if not partial:
        slug = data.get("slug")
        if not isinstance(slug, str) or not slug.strip():
            errors["slug"] = "is required"
        elif slug != slug.strip().strip("/") or " " in slug:
            errors["slug"] = "must not contain spaces or leading/trailing slashes"

        locale = data.get("locale")
        if locale not in tuple(supported_locales):
            errors["locale"] = f"must be one of {', '.join(supported_locales)}"

    if not partial or "title" in data:
        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            errors["title"] = "is required"

    if "description" in data and data["description"] is not None \
            and not isinstance(data["description"], str):
        errors["description"] = "must be a string"

    if not partial or "layout" in data:
        errors.update(validate_layout(data.get("layout", [])))

    _check_seo(data.get("seo"), errors)

    if errors:
        raise ValidationError("Validation error", details=errors)
