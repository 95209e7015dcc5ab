"""
Error taxonomy shared by the API server and the client library.

Services raise these; endpoints turn them into HTTP responses and the
client turns HTTP responses back into them. Every message is safe to show
to the person using the app - internal details only go to the logs.
"""


class ElderEaseError(Exception):
    """Base class for all ElderEase errors."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InputValidationError(ElderEaseError):
    """Missing or malformed input."""

    default_message = "Please check the information you entered."

    def __init__(self, message: str = None, field: str = None):
        super().__init__(message)
        self.field = field


class DuplicateEmailError(ElderEaseError):
    """Registration (or e-mail change) with an address already in use."""

    default_message = "An account with this email already exists."


class InvalidCredentialsError(ElderEaseError):
    """
    Login failed.

    Used for both "no such user" and "wrong password" so the response
    never reveals whether an account exists.
    """

    default_message = "Invalid email or password."


class NotFoundError(ElderEaseError):
    """Profile, tutorial or other record does not exist."""

    default_message = "We couldn't find what you were looking for."


class TransientIOError(ElderEaseError):
    """Storage or network failure; the same action may succeed later."""

    default_message = "We couldn't reach the server. Your changes may not be saved yet."


class NotAuthenticatedError(ElderEaseError):
    """A signed-in user is required but the session is anonymous."""

    default_message = "Please sign in first."
