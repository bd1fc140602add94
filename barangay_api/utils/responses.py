from flask import jsonify, request
from barangay_api.exceptions import ValidationError


def success_response(data=None, message=None, status_code=200, **extra):
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    body.update(extra)
    return jsonify(body), status_code


def json_body() -> dict:
    """The request's JSON object; empty when the body is missing or unparseable."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
