from http import HTTPStatus


class ApiError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = 'Ein Fehler ist aufgetreten. Bitte versuche es später erneut.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status = HTTPStatus.BAD_REQUEST
    default_message = 'Ungültige Eingabe.'


class AuthenticationError(ApiError):
    status = HTTPStatus.UNAUTHORIZED
    default_message = 'Token ist ungültig oder abgelaufen.'


class AuthorizationError(ApiError):
    status = HTTPStatus.FORBIDDEN
    default_message = 'Zugriff verweigert.'


class NotFoundError(ApiError):
    status = HTTPStatus.NOT_FOUND
    default_message = 'Nicht gefunden.'


class ConflictError(ApiError):
    status = HTTPStatus.CONFLICT
    default_message = 'Eintrag existiert bereits.'


class StorageError(ApiError):
    default_message = 'Speicherdienst nicht verfügbar.'
