"""Shared fixtures: a fresh SQLite database and upload root per test."""

from typing import Optional

import pytest
from landing_cms import create_app
from landing_cms.extensions import db
from landing_cms.models.tenant import Tenant
from landing_cms.models.user import User, ROLE_EDITOR, ROLE_SUPER_ADMIN, ROLE_VIEWER
from landing_cms.utils.decorators import Principal


@pytest.fixture
def app(tmp_path):
    app = create_app(
        "testing",
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_ROOT=str(tmp_path / "public"),
    )

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_tenant(domain: str, name: str) -> Tenant:
    tenant = Tenant()
    tenant.domain = domain
    tenant.name = name
    db.session.add(tenant)
    db.session.commit()
    return tenant


def _make_user(email: str, role: str, tenant_id: Optional[str]) -> User:
    user = User()
    user.email = email
    user.role = role
    user.tenant_id = tenant_id
    user.set_password("secret-password")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def tenant(app) -> Tenant:
    return _make_tenant("localhost", "Demo Health Clinic")


@pytest.fixture
def other_tenant(app) -> Tenant:
    return _make_tenant("clinica-do.example", "Clínica Santo Domingo")


@pytest.fixture
def editor(tenant) -> Principal:
    user = _make_user("editor@example.com", ROLE_EDITOR, tenant.id)
    return Principal(id=user.id, role=user.role, tenant_id=tenant.id)


@pytest.fixture
def viewer(tenant) -> Principal:
    user = _make_user("viewer@example.com", ROLE_VIEWER, tenant.id)
    return Principal(id=user.id, role=user.role, tenant_id=tenant.id)


@pytest.fixture
def other_editor(other_tenant) -> Principal:
    user = _make_user("editor@clinica-do.example", ROLE_EDITOR, other_tenant.id)
    return Principal(id=user.id, role=user.role, tenant_id=other_tenant.id)


@pytest.fixture
def super_admin(app) -> Principal:
    user = _make_user("admin@example.com", ROLE_SUPER_ADMIN, None)
    return Principal(id=user.id, role=user.role, tenant_id=None)

