#!/usr/bin/env python3
"""
Order Ledger service.

Keeps orders in memory for the lifetime of the process. An order is accepted
only after the user directory confirms that the referenced user exists.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from microservices.config import OrderServiceConfig, configure_logging
from microservices.errors import (
    DependencyUnavailableError,
    OrderNotFoundError,
    UserNotFoundError,
    ValidationError,
    register_error_handlers,
    success,
)
from microservices.models import Order, generate_id
from microservices.user_client import UserLookupClient

logger = logging.getLogger(__name__)


class OrderStore:
    """In-memory order collection. Writers are serialized by a lock."""

    def __init__(self):
        self._orders: List[Order] = []
        self._by_id: Dict[str, Order] = {}
        self._lock = threading.Lock()

    def create(self, user_id: str, product: Any, quantity: Any, total: Any) -> Order:
        with self._lock:
            order_id = generate_id()
            while order_id in self._by_id:
                order_id = generate_id()
            order = Order(id=order_id, user_id=user_id, product=product, quantity=quantity, total=total)
            self._orders.append(order)
            self._by_id[order.id] = order
            return order

    def get(self, order_id: str) -> Optional[Order]:
        with self._lock:
            return self._by_id.get(order_id)

    def all(self) -> List[Order]:
        with self._lock:
            return list(self._orders)

    def __len__(self):
        with self._lock:
            return len(self._orders)


def _require_user_id(payload) -> str:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    user_id = payload.get("userId")
    if isinstance(user_id, int) and not isinstance(user_id, bool):
        user_id = str(user_id)
    if not isinstance(user_id, str) or not user_id.strip():
        raise ValidationError("userId is required")
    return user_id


def create_order(payload, store: OrderStore, lookup_client: UserLookupClient) -> Order:
    """Validate the referenced user with the directory, then record the order."""
    user_id = _require_user_id(payload)

    result = lookup_client.lookup(user_id)
    if result.not_found:
        logger.info(f"Rejected order for unknown user {user_id!r}")
        raise UserNotFoundError()
    if result.unreachable:
        logger.error(f"Rejected order for user {user_id!r}: user service unreachable ({result.reason})")
        raise DependencyUnavailableError()

    order = store.create(
        user_id=user_id,
        product=payload.get("product"),
        quantity=payload.get("quantity"),
        total=payload.get("total"),
    )
    logger.info(f"Created order {order.id} for user {user_id!r}")
    return order


def create_app(config: dict = None, lookup_client: UserLookupClient = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(OrderServiceConfig)
    if config:
        app.config.update(config)

    app.extensions["order_store"] = OrderStore()
    app.extensions["user_client"] = lookup_client or UserLookupClient.from_config(app.config)

    register_error_handlers(app)

    @app.before_request
    def log_request():
        logger.debug(f"Order service received: {request.method} {request.path}")

    @app.route("/health")
    def health():
        return jsonify({
            "service": app.config["SERVICE_NAME"],
            "status": "healthy",
            "userServiceUrl": app.config["USER_SERVICE_URL"],
        })

    @app.route("/orders", methods=["GET"])
    @app.route("/api/orders", methods=["GET"])
    def list_orders():
        return success([order.to_dict() for order in get_store(app).all()])

    @app.route("/orders", methods=["POST"])
    @app.route("/api/orders", methods=["POST"])
    def post_order():
        payload = request.get_json(silent=True)
        order = create_order(payload, get_store(app), get_user_client(app))
        return success(order.to_dict(), 201)

    @app.route("/orders/<order_id>", methods=["GET"])
    @app.route("/api/orders/<order_id>", methods=["GET"])
    def get_order(order_id):
        order = get_store(app).get(order_id)
        if order is None:
            raise OrderNotFoundError()

        result = get_user_client(app).lookup(order.user_id)
        if result.unreachable:
            raise DependencyUnavailableError()

        return jsonify({
            "orderId": order.id,
            "product": order.product,
            "user": result.user.to_dict() if result.found else None,
        })

    return app


def get_store(app: Flask) -> OrderStore:
    return app.extensions["order_store"]


def get_user_client(app: Flask) -> UserLookupClient:
    return app.extensions["user_client"]


def main():
    configure_logging(OrderServiceConfig.LOG_LEVEL)
    app = create_app()
    port = app.config["PORT"]
    logger.info(f"🚀 Order service starting on port {port}")
    logger.info(f"🔗 Using user service at {app.config['USER_SERVICE_URL']} "
                f"(timeout {app.config['USER_SERVICE_TIMEOUT']}s)")
    app.run(host=app.config["HOST"], port=port, threaded=True)


if __name__ == "__main__":
    main()
