import os
from flask import Flask, current_app, send_from_directory
from flask_swagger_ui import get_swaggerui_blueprint
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .middleware.tenant_middleware import tenant_middleware
from .errors import register_error_handlers
from .commands import register_commands
from .utils.revalidation import CacheRevalidator
from .utils.storage import LocalBlobStorage

OPENAPI_URL = "/openapi/cms.yaml"
SWAGGER_URL = "/swagger"


def create_app(config_name: str = "development", **overrides) -> Flask:
    """Application factory. ``overrides`` are applied on top of the named config."""
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(overrides)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    app.extensions["blob_storage"] = LocalBlobStorage(app.config["UPLOAD_ROOT"])
    app.extensions["revalidator"] = CacheRevalidator(
        url=app.config.get("REVALIDATE_URL"),
        secret=app.config.get("REVALIDATE_SECRET"),
        timeout_s=app.config["REVALIDATE_TIMEOUT"],
    )

    tenant_middleware(app)
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    _register_public_files(app)
    _register_docs(app)

    register_error_handlers(app)
    register_commands(app)

    app.logger.info("landing-cms started (%s)", config_name)
    return app


def _register_public_files(app: Flask) -> None:
    # Resolved without a tenant: media URLs are shared with the public site

    @app.get("/uploads/<tenant_id>/<filename>", endpoint="uploaded_file")
    def serve_upload(tenant_id, filename):
        storage = current_app.extensions["blob_storage"]
        return send_from_directory(storage.absolute_path(f"uploads/{tenant_id}"), filename)

    @app.get(OPENAPI_URL, endpoint="openapi_cms")
    def serve_openapi():
        return send_from_directory(
            os.path.join(current_app.root_path, "api", "v1"),
            "cms_openapi.yaml",
            mimetype="application/yaml",
        )


def _register_docs(app: Flask) -> None:
    docs = get_swaggerui_blueprint(
        SWAGGER_URL,
        OPENAPI_URL,
        config={
            "app_name": "Landing CMS API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )
    app.register_blueprint(docs, url_prefix=SWAGGER_URL)
