"""Authentication routes."""

from __future__ import annotations

from flask import jsonify, request

from ...extensions import current_user, current_user_id, get_identity, get_session_factory
from ...extensions import login_required
from ...logging_config import get_logger
from ...services import auth as auth_service
from . import bp
from .forms import LoginForm, PasswordChangeForm, SignUpForm

logger = get_logger(__name__)


def _payload():
    return request.get_json(silent=True) or request.form


@bp.post("/signup")
def signup():
    """Create an account and sign it in."""

    form = SignUpForm.from_mapping(_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    try:
        user = auth_service.create_user(
            email=form.email or "",
            password=form.password or "",
            display_name=form.display_name or "",
            session_factory=get_session_factory(),
        )
    except ValueError as exc:
        return jsonify({"errors": {"email": [str(exc)]}}), 400
    get_identity().sign_in(user)
    return jsonify({"user": user.to_identity()}), 201


@bp.post("/login")
def login():
    form = LoginForm.from_mapping(_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    user = auth_service.authenticate(
        email=form.email or "",
        password=form.password or "",
        session_factory=get_session_factory(),
    )
    if user is None:
        return jsonify({"error": "Invalid email or password."}), 401
    get_identity().sign_in(user)
    logger.info("User signed in", extra={"user_id": user.id})
    return jsonify({"user": user.to_identity()})


@bp.post("/logout")
def logout():
    get_identity().sign_out()
    return jsonify({"message": "Signed out"})


@bp.get("/me")
def me():
    """Return the signed-in identity, or null."""

    user = current_user()
    return jsonify({"user": user.to_identity() if user else None})


@bp.post("/password")
@login_required
def change_password():
    form = PasswordChangeForm.from_mapping(_payload())
    if not form.validate():
        return jsonify({"errors": form.errors}), 400
    try:
        auth_service.change_password(
            user_id=current_user_id(),
            current_password=form.current_password or "",
            new_password=form.new_password or "",
            confirm_password=form.confirm_password or "",
            session_factory=get_session_factory(),
        )
    except ValueError as exc:
        return jsonify({"errors": {"password": [str(exc)]}}), 400
    return jsonify({"message": "Password changed successfully!"})
