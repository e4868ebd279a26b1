from rest_framework import status
from rest_framework.exceptions import APIException, NotFound


class Conflict(APIException):
    """Raised when a unique value (genre name, slug) is already taken"""
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"


class BadRequest(APIException):
    """Raised when a request is well-formed but breaks a catalogue rule"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request."
    default_code = "bad_request"


__all__ = ["Conflict", "BadRequest", "NotFound"]
