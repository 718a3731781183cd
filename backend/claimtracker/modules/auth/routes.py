import logging

from flask import request, jsonify, g
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from ...errors import Conflict, Unauthorized
from ...extensions import db
from ...models.user import User
from ...schemas.auth import CredentialsSchema
from ...security import issue_token
from . import bp

logger = logging.getLogger(__name__)

# Routes reachable without a bearer token
PUBLIC_ENDPOINTS = {"register", "login"}


def _auth_payload(user: User, message: str) -> dict:
    return {
        "message": message,
        "token": issue_token(int(user.id), user.username),
        "user": {"userId": user.id, "username": user.username},
    }


@bp.post("/register")
def register():
    data = CredentialsSchema().load(request.get_json(silent=True) or {})
    username = data["username"]

    # REST contract reports a taken username as 400
    if User.query.filter_by(username=username).first():
        raise Conflict("Username already exists", status_code=400)

    user = User(username=username, password_hash=generate_password_hash(data["password"]))
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict("Username already exists", status_code=400)

    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return jsonify(_auth_payload(user, "User registered successfully")), 201


@bp.post("/login")
def login():
    data = CredentialsSchema().load(request.get_json(silent=True) or {})

    user = User.query.filter_by(username=data["username"]).first()
    if not user or not user.password_hash or not check_password_hash(user.password_hash, data["password"]):
        raise Unauthorized("Invalid credentials")

    logger.info("User %s logged in", user.username)
    return jsonify(_auth_payload(user, "Logged in successfully"))


@bp.get("/me")
def me():
    return jsonify({"userId": g.current_user_id, "username": g.current_username})
