"""Errors raised by the config engine and mapped to responses by the service"""


class AliasGuiError(Exception):
    """Base class for all aliasgui errors"""

    status = 500


class ValidationError(AliasGuiError):
    """A write request carried a malformed alias"""

    status = 400


class PathRejectedError(AliasGuiError):
    """A backup path points outside the config directory or lacks the prefix"""

    status = 400


class BackupNotFoundError(AliasGuiError):
    """The requested backup file does not exist"""

    status = 404


class PayloadTooLargeError(AliasGuiError):
    """A raw request body exceeded the size ceiling"""

    status = 413


class ConfigIOError(AliasGuiError):
    """Reading, writing, copying or deleting a file failed"""

    status = 500
