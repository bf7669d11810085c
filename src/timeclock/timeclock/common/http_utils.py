from __future__ import annotations

import json
import logging
from functools import wraps
from typing import Any, Optional

from flask import jsonify

from ..core.exceptions import DomainError, IngestionError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def error_response(message: str, error: str, status: int):
    return jsonify({"success": False, "message": message, "error": error}), status


def json_errors(message: str):
    """Translate domain errors raised by a view into JSON error responses."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except (ValidationError, IngestionError) as e:
                return error_response(message, str(e), 400)
            except NotFoundError as e:
                return error_response(message, str(e), 404)
            except DomainError as e:
                logger.exception("%s", message)
                return error_response(message, str(e), 500)
            except Exception:
                logger.exception("%s", message)
                return error_response(message, "Internal server error", 500)

        return wrapper

    return decorator


def parse_json_field(raw: Optional[str], field_name: str) -> Optional[Any]:
    if raw is None or raw == "":
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError(f"Invalid {field_name} JSON format")
