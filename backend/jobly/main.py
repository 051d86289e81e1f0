from __future__ import annotations

import psycopg
import pydantic
import structlog
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from jobly.api.v1 import auth as v1_auth
from jobly.api.v1 import companies as v1_companies
from jobly.api.v1 import jobs as v1_jobs
from jobly.api.v1 import users as v1_users
from jobly.core.errors import JoblyError
from jobly.core.logging import init_logging, install_request_logging
from jobly.core.security import authenticate_jwt

logger = structlog.get_logger(__name__)

init_logging()

app = Flask(__name__)

CORS(app)

install_request_logging(app)
app.before_request(authenticate_jwt)

app.register_blueprint(v1_auth.bp, url_prefix="/api/v1")
app.register_blueprint(v1_companies.bp, url_prefix="/api/v1")
app.register_blueprint(v1_jobs.bp, url_prefix="/api/v1")
app.register_blueprint(v1_users.bp, url_prefix="/api/v1")


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

@app.errorhandler(JoblyError)
def handle_jobly_error(exc: JoblyError):
    if exc.status_code >= 500:
        logger.error("request_failed", error=exc.message)
    return jsonify({"detail": exc.message}), exc.status_code


@app.errorhandler(pydantic.ValidationError)
def handle_invalid_request(exc: pydantic.ValidationError):
    errors = [
        {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
        for err in exc.errors()
    ]
    return jsonify({"detail": errors}), 400


@app.errorhandler(psycopg.IntegrityError)
def handle_integrity_error(exc: psycopg.IntegrityError):
    logger.warning("constraint_violation", error=str(exc).splitlines()[0])
    return jsonify({"detail": "Request violates a database constraint"}), 400


@app.errorhandler(psycopg.DataError)
def handle_data_error(exc: psycopg.DataError):
    logger.warning("invalid_column_value", error=str(exc).splitlines()[0])
    return jsonify({"detail": "Invalid value for column"}), 400


@app.errorhandler(HTTPException)
def handle_http_error(exc: HTTPException):
    return jsonify({"detail": exc.description}), exc.code


@app.errorhandler(Exception)
def handle_unexpected_error(exc: Exception):
    logger.exception("unhandled_error")
    return jsonify({"detail": "Internal server error"}), 500


@app.get("/health")
def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    from jobly.core.config import settings

    app.run(host=settings.API_HOST, port=settings.API_PORT, debug=settings.DEBUG)
