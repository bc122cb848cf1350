# -*- coding: utf-8 -*-
"""
Google Drive Upload Package
===========================

This package provides modular components for uploading a local file or
directory tree from a CI pipeline to a Google Drive folder, mirroring the
local folder structure and optionally overwriting same-named files.

Modules:
--------
- actions_io: GitHub Actions inputs, outputs and workflow commands
- config: Input parsing and validation
- auth: Service account key / workload identity federation / dry run
- drive_api: Google Drive v3 operations
- drive_service: Drive adapter (find-or-create folders, create-or-overwrite files)
- uploader: Upload orchestration and folder mirroring
- file_handler: MIME lookup, file discovery, exclusion patterns
- monitoring: Upload statistics
- utils: Shared utility functions

Usage Example:
-------------
    from drive_upload.auth import resolve_auth_mode
    from drive_upload.drive_service import create_drive_service
    from drive_upload.uploader import Uploader

    auth_mode = resolve_auth_mode(credentials=encoded_key)
    uploader = Uploader(create_drive_service(auth_mode))
    result = uploader.upload('dist', parent_folder_id, overwrite=True)
"""

__version__ = "1.0.0"

# Main exports for convenience
from .config import parse_config, Config
from .exceptions import ConfigurationError, DriveApiError
from .auth import resolve_auth_mode, ServiceAccountKey, WorkloadIdentity, DryRun
from .drive_service import (
    GoogleDriveService,
    DryRunDriveService,
    create_drive_service,
    is_dry_run_id
)
from .uploader import Uploader, UploadResult, UploadedFile
from .file_handler import get_mime_type, should_exclude_path, discover_files
from .monitoring import UploadStatistics
from .utils import is_debug_enabled

__all__ = [
    # Configuration
    'parse_config',
    'Config',
    'ConfigurationError',
    # Authentication
    'resolve_auth_mode',
    'ServiceAccountKey',
    'WorkloadIdentity',
    'DryRun',
    # Drive adapter
    'GoogleDriveService',
    'DryRunDriveService',
    'create_drive_service',
    'is_dry_run_id',
    'DriveApiError',
    # Upload Operations
    'Uploader',
    'UploadResult',
    'UploadedFile',
    # File Operations
    'get_mime_type',
    'should_exclude_path',
    'discover_files',
    # Monitoring
    'UploadStatistics',
    # Utilities
    'is_debug_enabled',
]
