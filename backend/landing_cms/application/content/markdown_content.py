from typing import Optional
from flask import current_app
from landing_cms.extensions import db
from landing_cms.models.markdown_content import MarkdownContent
from landing_cms.application._guards import require_editor
from landing_cms.domain.exceptions import ValidationError
from landing_cms.models.audit_log import ENTITY_CONTENT
from landing_cms.utils.audit import log_action
from landing_cms.utils.markdown import render_markdown
from landing_cms.utils.transaction import transactional


def _assert_locale(locale: str) -> None:
    supported = current_app.config["SUPPORTED_LOCALES"]
    if locale not in supported:
        raise ValidationError(
            "Unsupported locale",
            details={"locale": f"must be one of {', '.join(supported)}"},
        )


def get_rendered_markdown(*, tenant_id: str, key: str, locale: str) -> Optional[str]:
    """Render stored markdown as sanitized HTML, or None when the key is absent."""
    content = MarkdownContent.query.filter_by(
        tenant_id=tenant_id,
        key=key,
        locale=locale,
    ).first()

    if content is None:
        return None

    return render_markdown(content.content)


def upsert_markdown(
    *,
    tenant_id: str,
    key: str,
    locale: str,
    content: str,
    actor,
) -> MarkdownContent:
    require_editor(actor)

    _assert_locale(locale)

    errors = {}
    if not key or len(key) > 200:
        errors["key"] = "is required (max 200 characters)"
    if not isinstance(content, str):
        errors["content"] = "must be a string"
    if errors:
        raise ValidationError("Validation error", details=errors)

    with transactional():
        record = MarkdownContent.query.filter_by(
            tenant_id=tenant_id,
            key=key,
            locale=locale,
        ).first()

        created = record is None
        if created:
            record = MarkdownContent()
            record.tenant_id = tenant_id
            record.key = key
            record.locale = locale

        record.content = content
        db.session.add(record)
        db.session.flush()

        log_action(
            tenant_id=tenant_id,
            actor_id=actor.id,
            action="content.create" if created else "content.update",
            entity_type=ENTITY_CONTENT,
            entity_id=record.id,
            payload={"key": key, "locale": locale},
        )

    return record
