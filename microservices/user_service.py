#!/usr/bin/env python3
"""
User Directory service.

Owns a fixed set of user records and answers lookups by id. Read-only: no
route mutates the directory.
"""

import json
import logging
from typing import Dict, Iterable, List, Optional

from flask import Flask, jsonify, request

from microservices.config import UserServiceConfig, configure_logging
from microservices.errors import ConfigError, UserNotFoundError, register_error_handlers, success
from microservices.models import User

logger = logging.getLogger(__name__)

SEED_USERS = [
    {"id": "1", "name": "John Doe", "email": "john@example.com"},
    {"id": "2", "name": "Jane Smith", "email": "jane@example.com"},
]


class UserDirectory:
    def __init__(self, users: Iterable[User]):
        self._users: Dict[str, User] = {}
        for user in users:
            self._users[user.id] = user

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "UserDirectory":
        return cls(User.from_dict(record) for record in records)

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def all(self) -> List[User]:
        return list(self._users.values())

    def __len__(self):
        return len(self._users)

    def __contains__(self, user_id):
        return user_id in self._users


def load_seed(path: Optional[str]) -> List[dict]:
    """Read seed users from a JSON file, or fall back to the built-in set."""
    if not path:
        return SEED_USERS
    try:
        with open(path) as f:
            records = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not read USER_SEED_FILE {path}: {e}")
    if not isinstance(records, list):
        raise ConfigError(f"USER_SEED_FILE {path} must contain a JSON list of users")
    return records


def create_app(config: dict = None, users: Iterable[dict] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(UserServiceConfig)
    if config:
        app.config.update(config)

    records = users if users is not None else load_seed(app.config.get("USER_SEED_FILE"))
    try:
        directory = UserDirectory.from_records(records)
    except (KeyError, TypeError, AttributeError) as e:
        raise ConfigError(f"Invalid user seed record: {e}")
    app.extensions["user_directory"] = directory

    register_error_handlers(app)

    @app.before_request
    def log_request():
        logger.debug(f"User service received: {request.method} {request.path}")

    @app.route("/health")
    def health():
        return jsonify({"service": app.config["SERVICE_NAME"], "status": "healthy"})

    @app.route("/users")
    def list_users():
        return success([user.to_dict() for user in get_directory(app).all()])

    @app.route("/users/<user_id>")
    @app.route("/api/users/<user_id>")
    def get_user(user_id):
        user = get_directory(app).get(user_id)
        if user is None:
            raise UserNotFoundError()
        return success(user.to_dict())

    return app


def get_directory(app: Flask) -> UserDirectory:
    return app.extensions["user_directory"]


def main():
    configure_logging(UserServiceConfig.LOG_LEVEL)
    app = create_app()
    port = app.config["PORT"]
    logger.info(f"🚀 User service starting on port {port} with {len(get_directory(app))} users")
    app.run(host=app.config["HOST"], port=port, threaded=True)


if __name__ == "__main__":
    main()
