from __future__ import annotations

from flask import Flask, jsonify

from ..common.request_utils import actor_id_from_request, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    transactions = container.transaction_service
    stats = container.stats_service

    @app.post("/api/transactions", endpoint="create_transaction")
    def create_transaction():
        tx = transactions.create(json_body())
        return jsonify(tx.to_dict()), 201

    @app.get("/api/transactions", endpoint="list_transactions")
    def list_transactions():
        return jsonify([row.to_dict() for row in transactions.list()])

    @app.patch("/api/transactions/<int:transaction_id>", endpoint="update_transaction")
    def update_transaction(transaction_id: int):
        tx = transactions.update(transaction_id, json_body())
        return jsonify(tx.to_dict())

    @app.delete("/api/transactions/<int:transaction_id>", endpoint="delete_transaction")
    def delete_transaction(transaction_id: int):
        result = transactions.delete(transaction_id, actor_id=actor_id_from_request())
        return jsonify(result)

    @app.get("/api/transactions/stats", endpoint="transaction_stats")
    def transaction_stats():
        return jsonify(stats.daily_stats().to_dict())

    @app.get("/api/transactions/leaderboard", endpoint="mpesa_leaderboard")
    def mpesa_leaderboard():
        return jsonify([e.to_dict() for e in stats.mpesa_leaderboard()])

    @app.get("/api/clients-served", endpoint="clients_served")
    def clients_served():
        return jsonify([c.to_dict() for c in transactions.clients_served()])
