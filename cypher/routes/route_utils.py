# cypher/routes/route_utils.py
import logging
from functools import wraps
from flask import jsonify, request
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException
from cypher.extensions.extension import db
from cypher.errors import ApiError, ConflictError, StorageError

logger = logging.getLogger(__name__)


def error_response(error):
    return jsonify({'message': error.message}), error.status


def handle_errors(f):
    """Map every failure raised by a view onto one JSON error response.

    Known errors keep their status code and message. Unique constraint
    violations surface as 409, anything else is logged and reported as a
    generic 500 so the client never sees internals.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ApiError as e:
            db.session.rollback()
            if isinstance(e, StorageError):
                logger.error(f"Storage failure in {f.__name__}: {e.__cause__ or e}")
            return error_response(e)
        except IntegrityError as e:
            db.session.rollback()
            logger.warning(f"Integrity error in {f.__name__}: {e.orig}")
            return error_response(ConflictError())
        except HTTPException:
            raise
        except Exception:
            db.session.rollback()
            logger.exception(f"Unhandled error in {f.__name__}")
            return error_response(ApiError())
    return decorated_function


def request_data():
    """Form fields for multipart requests, the JSON body otherwise."""
    if request.form:
        return request.form.to_dict()
    return request.get_json(silent=True) or {}


def non_text_field(data, *names):
    """First of ``names`` sent with a value that is neither a string nor null."""
    for name in names:
        value = data.get(name)
        if value is not None and not isinstance(value, str):
            return name
    return None


def non_text_message(name):
    return f"Das Feld {name} muss ein Text sein."


def uploaded_file(name):
    file = request.files.get(name)
    if file is None or not file.filename:
        return None
    return file
