from flask import request, jsonify, g
from flask_jwt_extended import create_access_token
from landing_cms.domain.exceptions import Forbidden, Unauthorized, ValidationError
from landing_cms.models.user import User
from . import v1_bp


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError("Invalid request body", details={"body": "must be a JSON object"})

    email = data.get("email")
    password = data.get("password")

    if not email or not password:
        raise ValidationError(
            "Email and password required",
            details={k: "is required" for k in ("email", "password") if not data.get(k)},
        )

    tenant = g.current_tenant

    user = User.query.filter_by(email=email).first()

    # Tenant users may only sign in on their own domain
    if user and user.tenant_id is not None and user.tenant_id != tenant.id:
        user = None

    if not user or not user.check_password(password):
        raise Unauthorized("Invalid credentials")

    if not user.is_active:
        raise Forbidden("User account disabled")

    access_token = create_access_token(
        identity=user.id,
        additional_claims={
            "role": user.role,
            "tenant_id": user.tenant_id,
        },
    )

    return jsonify({
        "access_token": access_token,
        "user": {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role,
            "tenant_id": user.tenant_id,
        },
    }), 200
