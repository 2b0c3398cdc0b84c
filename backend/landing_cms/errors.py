from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from landing_cms.domain.exceptions import CMSError


def register_error_handlers(app):
    @app.errorhandler(CMSError)
    def handle_cms_error(error):
        response = jsonify(error.to_dict())
        response.status_code = error.status_code
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({
            "error": error.name,
            "message": error.description,
        })
        response.status_code = error.code or 500
        return response

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        current_app.logger.exception("Unhandled error: %s", error)
        response = jsonify({
            "error": "Internal",
            "message": "Internal server error",
        })
        response.status_code = 500
        return response
