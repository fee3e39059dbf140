"""Custom Exceptions for the Sublingo application."""

class SublingoError(Exception):
    """Base class for exceptions in this module."""
    pass

class ConfigurationError(SublingoError):
    """Exception raised for errors in configuration loading."""
    pass

class SubtitleReadError(SublingoError):
    """Exception raised when a subtitle file exists but cannot be read or decoded."""
    pass

class UnsupportedFormatError(SublingoError):
    """Exception raised for an unknown subtitle format tag or file extension."""
    pass

class FormattingError(SublingoError):
    """Exception raised for errors during subtitle rendering or writing."""
    pass

class FileSystemError(SublingoError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass
