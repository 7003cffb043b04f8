class PQCCheckError(Exception):
    """Base class for errors raised by the PQC checker."""


class InputError(PQCCheckError):
    """Raised when no usable URL could be resolved from the command line."""


class NavigationError(PQCCheckError):
    """
    Raised when the browser fails to load a URL or never reports a security state.
    """

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)
