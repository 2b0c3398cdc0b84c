"""Tests for page creation, edits, publishing and deletion."""

import string

import pytest

from landing_cms.application.cms.create_page import create_page
from landing_cms.application.cms.delete_page import delete_page
from landing_cms.application.cms.publish_page import publish_page
from landing_cms.application.cms.queries import get_page, get_preview_page
from landing_cms.application.cms.update_page import update_page
from landing_cms.domain.exceptions import Conflict, Forbidden, NotFound, ValidationError
from landing_cms.domain.lifecycle.page import DRAFT, PUBLISHED, STAGING
from landing_cms.extensions import db
from landing_cms.models.page_version import PageVersion
from landing_cms.utils import versioning

from tests.helpers import sample_layout

URL_SAFE = set(string.ascii_letters + string.digits + "-_")


@pytest.fixture
def page(tenant, editor):
    return create_page(
        tenant_id=tenant.id,
        actor=editor,
        data={"slug": "home", "locale": "es-CO", "title": "Inicio", "layout": sample_layout()},
    )


class TestCreatePage:
    def test_new_page_is_draft(self, page) -> None:
        assert page.status == DRAFT
        assert page.preview_token is None
        assert page.layout == sample_layout()

    def test_locale_defaults_to_es_co(self, tenant, editor) -> None:
        created = create_page(tenant_id=tenant.id, actor=editor, data={"slug": "about", "title": "Nosotros"})
        assert created.locale == "es-CO"
        assert created.layout == []

    def test_duplicate_slug_and_locale_conflicts(self, page, tenant, editor) -> None:
        with pytest.raises(Conflict):
            create_page(tenant_id=tenant.id, actor=editor, data={"slug": "home", "locale": "es-CO", "title": "Otra"})

    def test_same_slug_other_locale_is_allowed(self, page, tenant, editor) -> None:
        english = create_page(tenant_id=tenant.id, actor=editor, data={"slug": "home", "locale": "en", "title": "Home"})
        assert english.id != page.id

    def test_same_slug_in_two_tenants(self, page, other_tenant, other_editor) -> None:
        """Uniqueness is per tenant."""
        other = create_page(
            tenant_id=other_tenant.id,
            actor=other_editor,
            data={"slug": "home", "locale": "es-CO", "title": "Inicio"},
        )
        assert other.tenant_id != page.tenant_id

    @pytest.mark.parametrize(
        "data, field",
        [
            ({"title": "Sin slug"}, "slug"),
            ({"slug": "x"}, "title"),
            ({"slug": "x", "title": "X", "locale": "fr"}, "locale"),
            ({"slug": "x", "title": "X", "layout": [{"type": "hero"}]}, "layout[0].id"),
        ],
    )
    def test_validation_errors_are_field_level(self, tenant, editor, data, field) -> None:
        with pytest.raises(ValidationError) as exc:
            create_page(tenant_id=tenant.id, actor=editor, data=data)
        assert field in exc.value.details

    def test_viewer_cannot_create(self, tenant, viewer) -> None:
        with pytest.raises(Forbidden):
            create_page(tenant_id=tenant.id, actor=viewer, data={"slug": "x", "title": "X"})


class TestUpdatePage:
    def test_update_snapshots_previous_state_and_resets_to_draft(self, page, tenant, editor) -> None:
        publish_page(tenant_id=tenant.id, page_id=page.id, environment="production", actor=editor)

        updated = update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"title": "Nuevo inicio"})

        assert updated.status == DRAFT
        assert updated.title == "Nuevo inicio"

        versions = PageVersion.query.filter_by(page_id=page.id).all()
        assert len(versions) == 1
        assert versions[0].version == 1
        assert versions[0].title == "Inicio"
        assert versions[0].status == PUBLISHED
        assert versions[0].layout == sample_layout()

    def test_versions_are_gap_free(self, page, tenant, editor) -> None:
        for i in range(5):
            update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"title": f"Título {i}"})

        numbers = [
            v.version
            for v in PageVersion.query.filter_by(page_id=page.id).order_by(PageVersion.version).all()
        ]
        assert numbers == [1, 2, 3, 4, 5]

    def test_version_numbers_are_per_page(self, page, tenant, editor) -> None:
        second = create_page(tenant_id=tenant.id, actor=editor, data={"slug": "servicios", "title": "Servicios"})
        update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"title": "A"})
        update_page(tenant_id=tenant.id, page_id=second.id, actor=editor, data={"title": "B"})

        assert [v.version for v in PageVersion.query.filter_by(page_id=second.id)] == [1]

    def test_update_from_other_tenant_is_not_found(self, page, other_tenant, other_editor) -> None:
        with pytest.raises(NotFound):
            update_page(tenant_id=other_tenant.id, page_id=page.id, actor=other_editor, data={"title": "Hack"})
        assert PageVersion.query.count() == 0

    def test_slug_is_immutable(self, page, tenant, editor) -> None:
        with pytest.raises(ValidationError) as exc:
            update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"slug": "otra"})
        assert "slug" in exc.value.details

    def test_empty_update_is_rejected(self, page, tenant, editor) -> None:
        with pytest.raises(ValidationError):
            update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={})
        assert PageVersion.query.count() == 0

    def test_unknown_block_types_round_trip(self, page, tenant, editor) -> None:
        layout = [{"id": "x-1", "type": "testimonial-carousel", "content": {"items": [1, 2], "autoplay": True}}]
        updated = update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"layout": layout})
        db.session.expire_all()
        assert get_page(tenant_id=tenant.id, page_id=updated.id).layout == layout

    def test_version_collision_is_retried(self, page, tenant, editor, monkeypatch) -> None:
        update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"title": "Primero"})

        real_next_version = versioning.next_version
        calls = []

        def stale_then_real(page_id, tenant_id):
            calls.append(page_id)
            # First attempt reuses a number another writer already took
            return 1 if len(calls) == 1 else real_next_version(page_id, tenant_id)

        monkeypatch.setattr(versioning, "next_version", stale_then_real)

        updated = update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"title": "Segundo"})

        assert len(calls) == 2
        assert updated.title == "Segundo"
        numbers = [v.version for v in PageVersion.query.filter_by(page_id=page.id).order_by(PageVersion.version)]
        assert numbers == [1, 2]

    def test_persistent_version_collision_conflicts(self, app, page, tenant, editor, monkeypatch) -> None:
        update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"title": "Primero"})
        app.config["VERSION_RETRY_ATTEMPTS"] = 2
        calls = []

        def always_stale(page_id, tenant_id):
            calls.append(page_id)
            return 1

        monkeypatch.setattr(versioning, "next_version", always_stale)

        with pytest.raises(Conflict):
            update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"title": "Nunca"})

        assert len(calls) == 2
        db.session.expire_all()
        assert get_page(tenant_id=tenant.id, page_id=page.id).title == "Primero"
        assert PageVersion.query.filter_by(page_id=page.id).count() == 1

    def test_stale_if_unmodified_since_conflicts(self, page, tenant, editor) -> None:
        with pytest.raises(Conflict):
            update_page(
                tenant_id=tenant.id,
                page_id=page.id,
                actor=editor,
                data={"title": "Tarde"},
                if_unmodified_since="2000-01-01T00:00:00Z",
            )


class TestPublishPage:
    def test_staging_issues_fresh_url_safe_token(self, page, tenant, editor) -> None:
        first = publish_page(tenant_id=tenant.id, page_id=page.id, environment="staging", actor=editor)
        token_one = first.page.preview_token

        assert first.page.status == STAGING
        assert first.page.staged_at is not None
        assert len(token_one) == 32
        assert set(token_one) <= URL_SAFE
        assert f"token={token_one}" in first.preview_url
        assert "slug=home" in first.preview_url

        second = publish_page(tenant_id=tenant.id, page_id=page.id, environment="staging", actor=editor)
        assert second.page.preview_token != token_one

    def test_production_clears_token(self, page, tenant, editor) -> None:
        publish_page(tenant_id=tenant.id, page_id=page.id, environment="staging", actor=editor)
        result = publish_page(tenant_id=tenant.id, page_id=page.id, environment="production", actor=editor)

        assert result.page.status == PUBLISHED
        assert result.page.preview_token is None
        assert result.page.published_at is not None
        assert result.preview_url is None

    def test_draft_can_go_straight_to_production(self, page, tenant, editor) -> None:
        result = publish_page(tenant_id=tenant.id, page_id=page.id, environment="production", actor=editor)
        assert result.page.status == PUBLISHED

    def test_published_cannot_go_back_to_staging(self, page, tenant, editor) -> None:
        publish_page(tenant_id=tenant.id, page_id=page.id, environment="production", actor=editor)
        with pytest.raises(Conflict):
            publish_page(tenant_id=tenant.id, page_id=page.id, environment="staging", actor=editor)

    def test_invalid_environment(self, page, tenant, editor) -> None:
        with pytest.raises(ValidationError):
            publish_page(tenant_id=tenant.id, page_id=page.id, environment="qa", actor=editor)

    def test_viewer_cannot_publish(self, page, tenant, viewer) -> None:
        with pytest.raises(Forbidden):
            publish_page(tenant_id=tenant.id, page_id=page.id, environment="staging", actor=viewer)

    def test_other_tenant_cannot_publish(self, page, other_tenant, other_editor) -> None:
        with pytest.raises(NotFound):
            publish_page(tenant_id=other_tenant.id, page_id=page.id, environment="production", actor=other_editor)

    def test_revalidation_covers_both_paths(self, app, page, tenant, editor) -> None:
        calls = []

        class Recorder:
            def revalidate(self, path):
                calls.append(path)

        app.extensions["revalidator"] = Recorder()
        publish_page(tenant_id=tenant.id, page_id=page.id, environment="production", actor=editor)

        assert calls == ["/home", "/es-CO/home"]

    def test_revalidation_failure_does_not_fail_publish(self, app, page, tenant, editor) -> None:
        class Broken:
            def revalidate(self, path):
                raise RuntimeError("cache unreachable")

        app.extensions["revalidator"] = Broken()
        result = publish_page(tenant_id=tenant.id, page_id=page.id, environment="production", actor=editor)

        db.session.expire_all()
        assert result.page.status == PUBLISHED
        assert get_page(tenant_id=tenant.id, page_id=page.id).status == PUBLISHED


class TestStagingScenario:
    def test_stage_edit_publish(self, page, tenant, editor) -> None:
        staged = publish_page(tenant_id=tenant.id, page_id=page.id, environment="staging", actor=editor)
        token = staged.page.preview_token
        assert get_preview_page(tenant_id=tenant.id, token=token, slug="home").id == page.id

        edited = update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"title": "Editado"})
        assert edited.status == DRAFT
        assert edited.preview_token is None

        version = PageVersion.query.filter_by(page_id=page.id, version=1).one()
        assert version.status == STAGING

        # The old link is spent once the page leaves STAGING
        with pytest.raises(NotFound):
            get_preview_page(tenant_id=tenant.id, token=token, slug="home")

        published = publish_page(tenant_id=tenant.id, page_id=page.id, environment="production", actor=editor)
        assert published.page.status == PUBLISHED
        assert published.page.preview_token is None


class TestDeletePage:
    def test_delete_cascades_versions(self, page, tenant, editor) -> None:
        update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"title": "v2"})
        update_page(tenant_id=tenant.id, page_id=page.id, actor=editor, data={"title": "v3"})
        page_id = page.id

        delete_page(tenant_id=tenant.id, page_id=page_id, actor=editor)

        with pytest.raises(NotFound):
            get_page(tenant_id=tenant.id, page_id=page_id)
        assert PageVersion.query.filter_by(page_id=page_id).count() == 0

    def test_delete_from_other_tenant_is_not_found(self, page, other_tenant, other_editor, tenant) -> None:
        with pytest.raises(NotFound):
            delete_page(tenant_id=other_tenant.id, page_id=page.id, actor=other_editor)
        assert get_page(tenant_id=tenant.id, page_id=page.id)
