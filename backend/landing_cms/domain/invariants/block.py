from typing import Any, Callable, Dict, Optional

# Payload checks for block types the page builder knows about.
# Each returns an error message or None.

def _require_keys(*keys: str) -> Callable[[Dict[str, Any]], Optional[str]]:
    def check(content: Dict[str, Any]) -> Optional[str]:
        for key in keys:
            value = content.get(key)
            if not isinstance(value, str) or not value.strip():
                return f"'{key}' is required"
        return None
    return check


def _no_requirements(content: Dict[str, Any]) -> Optional[str]:
    return None


def _image_check(content: Dict[str, Any]) -> Optional[str]:
    if not content.get("mediaId") and not content.get("url"):
        return "either 'mediaId' or 'url' is required"
    return None


KNOWN_BLOCK_TYPES: Dict[str, Callable[[Dict[str, Any]], Optional[str]]] = {
    "hero": _require_keys("title"),
    "text": _require_keys("text"),
    "markdown": _require_keys("key"),
    "image": _image_check,
    "cta": _require_keys("label", "href"),
    "services": _no_requirements,
    "contact": _no_requirements,
}


def validate_layout(layout: Any) -> Dict[str, str]:
    """
    Validate an ordered list of content blocks and return field errors.

    Blocks are a tagged union keyed by ``type``. Known types must carry
    an object payload with their required keys; unknown types are kept
    as-is so newer editor blocks survive a round trip.
    """
    errors: Dict[str, str] = {}

    if not isinstance(layout, list):
        return {"layout": "must be a list of blocks"}

    seen_ids = set()
    for index, block in enumerate(layout):
        prefix = f"layout[{index}]"

        if not isinstance(block, dict):
            errors[prefix] = "must be an object"
            continue

        block_id = block.get("id")
        if not isinstance(block_id, str) or not block_id:
            errors[f"{prefix}.id"] = "is required"
        elif block_id in seen_ids:
            errors[f"{prefix}.id"] = f"duplicate block id '{block_id}'"
        else:
            seen_ids.add(block_id)

        block_type = block.get("type")
        if not isinstance(block_type, str) or not block_type:
            errors[f"{prefix}.type"] = "is required"
            continue

        check = KNOWN_BLOCK_TYPES.get(block_type)
        if check is None:
            continue

        content = block.get("content")
        if not isinstance(content, dict):
            errors[f"{prefix}.content"] = "must be an object"
            continue

        message = check(content)
        if message:
            errors[f"{prefix}.content"] = message

    return errors
