"""Application errors surfaced to API clients."""


class PlacezError(Exception):
    """Base error carrying an HTTP status code and a client-facing message."""

    status_code: int = 500
    default_message: str = "An unknown error occurred!"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PlacezError):
    status_code = 422
    default_message = "Invalid inputs passed, please check your data."


class DuplicateUser(PlacezError):
    status_code = 422
    default_message = "User exists already, please login instead."


class InvalidCredentials(PlacezError):
    status_code = 401
    default_message = "Invalid credentials, could not log you in."


class Unauthorized(PlacezError):
    status_code = 401
    default_message = "Authentication failed."


class Forbidden(PlacezError):
    status_code = 401
    default_message = "You are not allowed to edit this place."


class NotFound(PlacezError):
    status_code = 404
    default_message = "Could not find the requested resource."


class UserNotFound(NotFound):
    default_message = "Could not find user for the provided id."


class AddressNotFound(PlacezError):
    status_code = 422
    default_message = "Could not find location for the specified address."


class InternalFailure(PlacezError):
    status_code = 500


class GeocodingUnavailable(InternalFailure):
    default_message = "Geocoding service is unavailable, please try again later."


class FetchFailed(PlacezError):
    status_code = 422
    default_message = "Fetching users failed, please try again later."
