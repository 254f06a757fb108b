# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask
from flask_cors import CORS

from credential_service.infrastructure.container import Container, container as default_container
from credential_service.shared.logging import logger, setup_logging
from credential_service.shared.middleware.error_handler import configure_error_handling
from credential_service.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    container = container or default_container
    config = container.config

    setup_logging(debug_mode=config.debug_logging)
    if container.uses_database:
        container.init_database()

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.json.sort_keys = False

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    cors_kwargs: dict[str, object] = {"resources": {r"/*": {"origins": config.security.allowed_origins}}}
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("Cache-Control", "no-store")
        return resp

    logger.info(f"Flask app initialized (store={config.store_backend})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
