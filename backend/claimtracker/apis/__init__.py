from flask import Blueprint, Flask, g, request

from ..modules.auth import bp as auth_bp
from ..modules.auth.routes import PUBLIC_ENDPOINTS
from ..modules.claims.routes import bp as claims_bp
from ..modules.validation.routes import bp as validate_bp
from ..modules.rti.routes import bp as rti_bp


def register_api(app: Flask) -> None:
    api = Blueprint("api", __name__, url_prefix="/api")

    # Bearer-token guard for every API route except register/login.
    # Missing token -> 401; bad signature, expired token or unknown user -> 403.
    @api.before_request  # type: ignore
    def _load_current_user():
        from ..errors import Forbidden, Unauthorized  # local import to avoid circulars
        from ..extensions import db
        from ..models.user import User
        from ..security import verify_token

        g.current_user = None
        g.current_user_id = None
        g.current_username = None
        if request.method == "OPTIONS":
            return None
        endpoint = (request.endpoint or "").rsplit(".", 1)[-1]
        if request.blueprint == "api.auth" and endpoint in PUBLIC_ENDPOINTS:
            return None

        auth = request.headers.get("Authorization") or ""
        token = auth[7:].strip() if auth.lower().startswith("bearer ") else ""
        if not token:
            raise Unauthorized("Access token required")

        uid, username = verify_token(token)
        user_obj = db.session.get(User, uid) if uid is not None else None
        if user_obj is None:
            raise Forbidden("Invalid token")

        g.current_user = user_obj
        g.current_user_id = user_obj.id
        g.current_username = username or user_obj.username
        return None

    # Mount feature blueprints
    api.register_blueprint(auth_bp)
    api.register_blueprint(claims_bp)
    api.register_blueprint(validate_bp)
    api.register_blueprint(rti_bp)

    app.register_blueprint(api)
