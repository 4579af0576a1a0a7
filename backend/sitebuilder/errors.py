from flask import jsonify
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException
from sitebuilder.extensions import db
from sitebuilder.domain.exceptions import LandingError, StorageUnavailable

RETRY_AFTER_SECONDS = 5

def register_error_handlers(app):
    @app.errorhandler(LandingError)
    def handle_landing_error(error):
        if error.status_code >= 500:
            app.logger.error(f"{error.kind}: {error.message} {error.details}")
        else:
            app.logger.info(f"{error.kind}: {error.message} {error.details}")

        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        if error.transient:
            response.headers["Retry-After"] = str(RETRY_AFTER_SECONDS)
        return response

    @app.errorhandler(OperationalError)
    def handle_storage_error(error):
        db.session.rollback()
        app.logger.error(f"Storage failure: {error}")
        return handle_landing_error(StorageUnavailable())

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        response = jsonify({
            "error": error.name,
            "message": error.description
        })
        response.status_code = error.code
        return response
