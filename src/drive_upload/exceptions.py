# -*- coding: utf-8 -*-
"""
Exception types for Google Drive upload operations.
"""


class ConfigurationError(ValueError):
    """Raised when action inputs or authentication settings are missing or invalid."""

    pass


class DriveApiError(Exception):
    """
    Raised when the Drive API answers with an error status.

    Attributes:
        status_code (int): HTTP status code of the failed response
        response_text (str): Raw response body, kept for troubleshooting
    """

    def __init__(self, message, status_code=None, response_text=None):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text
