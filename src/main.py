#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Google Drive Upload Script for GitHub Actions
=============================================

PURPOSE:
    Uploads a file or a whole directory tree from the workflow workspace to a
    Google Drive folder, typically to publish build artifacts, reports or
    documentation from a CI/CD pipeline.

INPUTS (read from INPUT_* environment variables, see action.yml):
    credentials
        Base64-encoded service account key JSON.
        Required unless workload identity federation or dry-run is used.

    workload-identity-provider / service-account
        Keyless authentication through Workload Identity Federation.
        Both are required together; the job needs `id-token: write`.

    parent-folder-id
        ID of the Drive folder that receives the upload. Required.
        The service account must have access to it (the drive.file scope
        only sees folders shared with, or created by, the app).

    path
        Local file or directory to upload. Required.

    name
        Optional remote name for the uploaded file or root folder.

    overwrite
        'true' replaces the content of a same-named file in the same folder
        (ID is kept). 'false' (default) always creates a new file, so
        repeated runs produce duplicates with identical names.

    dry-run
        'true' skips every Drive call and reports placeholder IDs.

    exclude
        Comma-separated exclusion patterns for directory uploads,
        e.g. '*.tmp,__pycache__,.git'.

    debug
        'true' enables verbose output.

OUTPUTS:
    file-id         ID of the uploaded file (single file uploads)
    folder-id       ID of the root folder (directory uploads)
    uploaded-files  JSON array of {path, id, name}

EXIT BEHAVIOR:
    Success: outputs are written and the step exits 0.
    Failure: the step is marked failed with the error message, no outputs
    are written and the step exits 1. Files uploaded before the failure
    stay in Drive; re-running reuses existing folders.
"""

# ====================================
# IMPORTS - External libraries needed
# ====================================

import os
import sys

from dotenv import load_dotenv

# Drive upload modules
from drive_upload import actions_io
from drive_upload.config import parse_config
from drive_upload.auth import resolve_auth_mode
from drive_upload.drive_service import create_drive_service
from drive_upload.uploader import Uploader
from drive_upload.monitoring import UploadStatistics

UNKNOWN_ERROR = 'An unknown error occurred'


# ====================================================================
# MAIN EXECUTION
# ====================================================================

def run():
    """
    Run the upload step.

    Process:
        1. Read and validate inputs (fails before any filesystem or Drive access)
        2. Resolve the authentication mode and build the Drive adapter
        3. Upload the file or directory
        4. Publish outputs and print summary

    Any exception ends the step as failed; nothing is re-raised.
    """
    try:
        config = parse_config()

        # Set environment variable for debug flag (enables debug checks in utils.py)
        if config.debug:
            os.environ['DEBUG'] = 'true'

        actions_io.info("Starting upload to Google Drive...")
        actions_io.info(f"Target path: {config.path}")
        actions_io.info(f"Parent folder ID: {config.parent_folder_id}")
        if config.name:
            actions_io.info(f"Custom name: {config.name}")
        actions_io.info(f"Overwrite: {str(config.overwrite).lower()}")
        actions_io.info(f"Dry run: {str(config.dry_run).lower()}")
        if config.exclude_patterns_list:
            actions_io.info(f"Exclusion patterns: {', '.join(config.exclude_patterns_list)}")

        auth_mode = resolve_auth_mode(
            credentials=config.credentials,
            workload_identity_provider=config.workload_identity_provider,
            service_account_email=config.service_account,
            dry_run=config.dry_run
        )
        actions_io.info(f"Authentication: {auth_mode.describe()}")

        stats = UploadStatistics()
        drive_service = create_drive_service(auth_mode, stats=stats)
        uploader = Uploader(drive_service, exclude_patterns=config.exclude_patterns_list, stats=stats)

        result = uploader.upload(
            config.path,
            config.parent_folder_id,
            config.name,
            config.overwrite
        )

        # Set outputs
        if result.file_id:
            actions_io.set_output('file-id', result.file_id)
        if result.folder_id:
            actions_io.set_output('folder-id', result.folder_id)
        actions_io.set_output('uploaded-files', result.to_json())

        actions_io.info(
            f"Upload completed successfully. {len(result.uploaded_files)} file(s) uploaded."
        )
        stats.print_summary(dry_run=config.dry_run)

    except Exception as e:
        actions_io.set_failed(str(e) or UNKNOWN_ERROR)


def main():
    """Load a local .env (for runs outside Actions), run the step and exit with its status."""
    load_dotenv()
    run()
    sys.exit(actions_io.exit_code)


if __name__ == "__main__":
    main()
