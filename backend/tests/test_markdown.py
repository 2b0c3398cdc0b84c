"""Tests for markdown rendering and sanitization."""

import pytest

from landing_cms.application.content.markdown_content import get_rendered_markdown, upsert_markdown
from landing_cms.domain.exceptions import Forbidden, ValidationError
from landing_cms.utils.markdown import render_markdown


class TestRenderMarkdown:
    def test_basic_formatting(self) -> None:
        html = render_markdown("# Hola\n\nTexto **importante** y [enlace](https://example.com).")
        assert "<h1>Hola</h1>" in html
        assert "<strong>importante</strong>" in html
        assert '<a href="https://example.com">enlace</a>' in html

    @pytest.mark.parametrize(
        "source",
        [
            "<script>alert('xss')</script>",
            "Hola\n\n<script src=\"https://evil.example/x.js\"></script>",
            "<SCRIPT>alert(1)</SCRIPT>",
        ],
    )
    def test_script_tags_never_survive(self, source) -> None:
        assert "<script" not in render_markdown(source).lower()

    def test_event_handlers_are_stripped(self) -> None:
        html = render_markdown('<img src="x.png" onerror="alert(1)">\n\n<p onclick="steal()">hola</p>')
        assert "onerror" not in html
        assert "onclick" not in html

    def test_javascript_links_are_dropped(self) -> None:
        html = render_markdown("[clic](javascript:void)")
        assert "javascript:" not in html

    def test_iframes_are_removed(self) -> None:
        html = render_markdown('<iframe src="https://evil.example"></iframe>')
        assert "<iframe" not in html

    def test_empty_source(self) -> None:
        assert render_markdown("") == ""


class TestMarkdownContent:
    def test_missing_key_renders_none(self, tenant) -> None:
        assert get_rendered_markdown(tenant_id=tenant.id, key="nope", locale="es-CO") is None

    def test_upsert_then_render(self, tenant, editor) -> None:
        upsert_markdown(tenant_id=tenant.id, key="home-hero", locale="es-CO", content="# Bienvenido", actor=editor)
        assert get_rendered_markdown(tenant_id=tenant.id, key="home-hero", locale="es-CO") == "<h1>Bienvenido</h1>"

        upsert_markdown(tenant_id=tenant.id, key="home-hero", locale="es-CO", content="## Otra vez", actor=editor)
        assert get_rendered_markdown(tenant_id=tenant.id, key="home-hero", locale="es-CO") == "<h2>Otra vez</h2>"

    def test_content_is_locale_and_tenant_scoped(self, tenant, editor, other_tenant) -> None:
        upsert_markdown(tenant_id=tenant.id, key="home-hero", locale="es-CO", content="hola", actor=editor)

        assert get_rendered_markdown(tenant_id=tenant.id, key="home-hero", locale="en") is None
        assert get_rendered_markdown(tenant_id=other_tenant.id, key="home-hero", locale="es-CO") is None

    def test_stored_markdown_stays_raw(self, tenant, editor) -> None:
        record = upsert_markdown(
            tenant_id=tenant.id, key="k", locale="es-CO", content="<script>x</script>", actor=editor
        )
        assert record.content == "<script>x</script>"

    def test_viewer_cannot_write(self, tenant, viewer) -> None:
        with pytest.raises(Forbidden):
            upsert_markdown(tenant_id=tenant.id, key="k", locale="es-CO", content="x", actor=viewer)

    def test_unsupported_locale(self, tenant, editor) -> None:
        with pytest.raises(ValidationError):
            upsert_markdown(tenant_id=tenant.id, key="k", locale="pt-BR", content="x", actor=editor)
