class InvalidConfigurationError(Exception):
    """Raised when the scheduler configuration cannot run at all (e.g. zero retry attempts)."""

    pass


class InputMismatchError(Exception):
    """Raised when there is a mismatch between the staff list, services and constraints."""

    pass


class PresetNotFoundError(Exception):
    """Raised when a named preset does not exist in the workspace."""

    pass


class FileReadingError(Exception):
    """Raised when there is an error reading a file."""

    pass


class FileContentError(Exception):
    """Raised when the content of a file is not as expected."""

    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    InvalidConfigurationError: 422,
    InputMismatchError: 400,
    PresetNotFoundError: 404,
    FileReadingError: 500,
    FileContentError: 400,
}
