# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response
from flask_cors import CORS

from authgate.infrastructure.container import Container
from authgate.infrastructure.db import build_engine, build_session_factory, init_db
from authgate.shared.config import AppConfig, load_config
from authgate.shared.logging import logger, setup_logging
from authgate.shared.middleware.error_handler import configure_error_handling
from authgate.shared.middleware.request_logger import configure_request_logging


def _configure_security_headers(app: Flask, config: AppConfig) -> None:
    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        resp.headers.setdefault("Cache-Control", "no-store")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp


def create_app(
    config: AppConfig | None = None,
    *,
    container: Container | None = None,
    setup_logs: bool = True,
) -> Flask:
    config = config or load_config()
    if setup_logs:
        setup_logging(debug_mode=config.debug_logging)

    if container is None:
        engine = build_engine(config.database)
        init_db(engine)
        container = Container(
            config, engine=engine, session_factory=build_session_factory(engine)
        )

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)

    configure_error_handling(app)
    configure_request_logging(app)
    _configure_security_headers(app, config)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


__all__ = ["create_app"]
