from __future__ import annotations

from flask import Flask, jsonify

from ..common.request_utils import actor_id_from_request, json_body
from ..container import Container
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    @app.get("/api/users", endpoint="list_users")
    def list_users():
        return jsonify([u.to_dict() for u in container.user_service.list_users()])

    @app.post("/api/users/login", endpoint="login")
    def login():
        body = json_body()
        pin = body.get("pin")
        result = container.auth_service.login(
            str(body.get("username") or ""),
            str(pin) if pin is not None else None,
        )
        return jsonify(result.to_dict())

    @app.post("/api/users/<int:user_id>/suspend", endpoint="suspend_user")
    def suspend_user(user_id: int):
        admin_id = actor_id_from_request(json_body())
        if admin_id is None:
            raise AuthorizationError("Only admin can suspend users.")
        user = container.attendance_policy.suspend(user_id, by_admin_id=admin_id)
        return jsonify(user.to_dict())

    @app.post("/api/users/<int:user_id>/recall", endpoint="recall_user")
    def recall_user(user_id: int):
        admin_id = actor_id_from_request(json_body())
        if admin_id is None:
            raise AuthorizationError("Only admin can recall users.")
        user = container.attendance_policy.recall(user_id, by_admin_id=admin_id)
        return jsonify(user.to_dict())
