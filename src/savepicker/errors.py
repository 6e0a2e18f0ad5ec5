class SavePickerError(Exception):
    """Base error for savepicker domain exceptions."""


class AlreadyOpenError(SavePickerError):
    """Raised when a picker is opened while another session is still active."""


class UnsupportedStorageError(SavePickerError):
    """Raised when no key-value storage is available to hold files."""


class ContentTypeError(SavePickerError, TypeError):
    """Raised when raw content is written that is not a string."""


class ContentDecodeError(SavePickerError, ValueError):
    """Raised when stored content cannot be parsed back into a value."""


class StorageCorruptError(SavePickerError):
    """Raised when a file-backed storage cannot be read back."""
