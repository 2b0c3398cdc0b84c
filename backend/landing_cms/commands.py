import os
import click
from flask import current_app
from landing_cms.extensions import db
from landing_cms.models.markdown_content import MarkdownContent
from landing_cms.models.tenant import Tenant
from landing_cms.models.user import User, ROLE_EDITOR, ROLE_SUPER_ADMIN
from landing_cms.utils.transaction import transactional

SAMPLE_CONTENT = {
    "home-hero": (
        "# Bienvenido a Demo Health Clinic\n\n"
        "Tu salud es nuestra prioridad. Ofrecemos servicios médicos de calidad "
        "con un equipo profesional dedicado a tu bienestar."
    ),
    "home-about": (
        "## Sobre nosotros\n\n"
        "Somos una clínica con más de 20 años de experiencia atendiendo a "
        "nuestra comunidad."
    ),
}


def _get_or_create_user(email, *, name, password, role, tenant_id=None):
    user = User.query.filter_by(email=email).first()
    if user:
        return user, False

    user = User()
    user.email = email
    user.name = name
    user.role = role
    user.tenant_id = tenant_id
    user.set_password(password)
    db.session.add(user)
    return user, True


def seed_demo_data(domain: str = "localhost") -> Tenant:
    """Idempotently create the demo tenant, its users and sample content."""
    with transactional():
        tenant = Tenant.query.filter_by(domain=domain).first()
        if tenant is None:
            tenant = Tenant()
            tenant.domain = domain
            tenant.name = "Demo Health Clinic"
            tenant.logo_url = "/logo.png"
            tenant.primary_color = "#0066cc"
            tenant.secondary_color = "#00cc66"
            tenant.font_family = "Inter, sans-serif"
            db.session.add(tenant)
            db.session.flush()
            current_app.logger.info("Created tenant %s", tenant.name)

        _get_or_create_user(
            os.getenv("SUPER_ADMIN_EMAIL", "admin@example.com"),
            name="Super Admin",
            password=os.getenv("SUPER_ADMIN_PASSWORD", "admin123"),
            role=ROLE_SUPER_ADMIN,
        )
        _get_or_create_user(
            "editor@example.com",
            name="Demo Editor",
            password="editor123",
            role=ROLE_EDITOR,
            tenant_id=tenant.id,
        )

        for key, content in SAMPLE_CONTENT.items():
            exists = MarkdownContent.query.filter_by(
                tenant_id=tenant.id, key=key, locale="es-CO"
            ).first()
            if exists:
                continue
            record = MarkdownContent()
            record.tenant_id = tenant.id
            record.key = key
            record.locale = "es-CO"
            record.content = content
            db.session.add(record)

    return tenant


def register_commands(app):
    @app.cli.command("seed")
    @click.option("--domain", default="localhost", show_default=True, help="Tenant domain to seed.")
    def seed(domain):
        """Create the demo tenant, users and sample markdown."""
        db.create_all()
        tenant = seed_demo_data(domain)
        click.echo(f"Seeded tenant {tenant.name} ({tenant.domain})")
