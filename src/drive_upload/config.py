# -*- coding: utf-8 -*-
"""
Configuration management for the Google Drive upload step.

This module reads the action inputs and validates them before any
filesystem or network work starts.
"""

from . import actions_io
from .exceptions import ConfigurationError

# Messages surfaced verbatim through set_failed()
MISSING_CREDENTIALS = "Google Drive credentials are required"
INCOMPLETE_IDENTITY = ("Both workload-identity-provider and service-account are required "
                       "for workload identity federation")
MISSING_PARENT_FOLDER = "Parent folder ID is required"
MISSING_PATH = "Path to upload is required"


class Config:
    """Configuration for Google Drive upload operations"""

    def __init__(self):
        """
        Read action inputs and initialize configuration.

        Inputs (see action.yml):
        1. credentials - base64-encoded service account key JSON
        2. workload-identity-provider - full WIF provider resource name
        3. service-account - service account email to impersonate via WIF
        4. parent-folder-id - destination Drive folder ID
        5. path - local file or directory to upload
        6. name (optional) - remote name override for the file/folder
        7. overwrite (optional) - replace same-named files in place (default: False)
        8. dry-run (optional) - simulate without touching Drive (default: False)
        9. exclude (optional) - comma-separated exclusion patterns (default: "")
        10. debug (optional) - enable verbose output (default: False)
        """
        # Authentication
        self.credentials = actions_io.get_input('credentials')
        self.workload_identity_provider = actions_io.get_input('workload-identity-provider')
        self.service_account = actions_io.get_input('service-account')

        # Upload target
        self.parent_folder_id = actions_io.get_input('parent-folder-id')
        self.path = actions_io.get_input('path')
        self.name = actions_io.get_input('name')

        # Flags
        self.overwrite = actions_io.get_boolean_input('overwrite')
        self.dry_run = actions_io.get_boolean_input('dry-run')
        self.debug = actions_io.get_boolean_input('debug')

        # Derived values
        self.exclude_patterns_list = actions_io.get_list_input('exclude')

    @property
    def uses_workload_identity(self):
        """True when any workload identity federation input was supplied."""
        return bool(self.workload_identity_provider or self.service_account)

    def validate(self):
        """
        Validate configuration values, in order, stopping at the first problem.

        Order: authentication -> parent folder ID -> path.
        Path existence is checked later by the uploader.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.dry_run and not self.credentials:
            if not self.uses_workload_identity:
                raise ConfigurationError(MISSING_CREDENTIALS)
            if not (self.workload_identity_provider and self.service_account):
                raise ConfigurationError(INCOMPLETE_IDENTITY)
        if not self.parent_folder_id:
            raise ConfigurationError(MISSING_PARENT_FOLDER)
        if not self.path:
            raise ConfigurationError(MISSING_PATH)


def parse_config():
    """
    Parse configuration from action inputs.

    Returns:
        Config: Configured Config object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = Config()
    config.validate()
    return config
