from __future__ import annotations

from flask import Flask, jsonify

from ..common.request_utils import actor_id_from_request, json_body, optional_datetime, required_int
from ..container import Container
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    ledger = container.shift_ledger

    @app.post("/api/shifts/clock-in", endpoint="clock_in")
    def clock_in():
        body = json_body()
        result = ledger.clock_in(required_int(body, "userId"))
        return jsonify(result.shift.to_dict()), (201 if result.created else 200)

    @app.get("/api/shifts/active/<int:user_id>", endpoint="active_shift")
    def active_shift(user_id: int):
        shift = ledger.get_active_shift(user_id)
        return jsonify(shift.to_dict() if shift else None)

    @app.post("/api/shifts/clock-out", endpoint="clock_out")
    def clock_out():
        body = json_body()
        shift = ledger.clock_out(required_int(body, "shiftId"), required_int(body, "byUserId"))
        return jsonify(shift.to_dict())

    @app.get("/api/shifts", endpoint="list_shifts")
    def list_shifts():
        return jsonify([row.to_dict() for row in ledger.list_all()])

    @app.patch("/api/shifts/<int:shift_id>", endpoint="update_shift")
    def update_shift(shift_id: int):
        body = json_body()
        admin_id = actor_id_from_request(body)
        if admin_id is None:
            raise AuthorizationError("Only admin can edit shifts")
        shift = ledger.update_shift(
            shift_id,
            actor_id=admin_id,
            clock_in=optional_datetime(body, "clockIn"),
            clock_out=optional_datetime(body, "clockOut"),
        )
        return jsonify(shift.to_dict())
