# -*- coding: utf-8 -*-
"""
Google Drive adapter used by the uploader.

GoogleDriveService turns upload intents (find-or-create a folder,
create-or-overwrite a file) into Drive API calls. DryRunDriveService
offers the same two operations but never contacts Drive and hands out
placeholder IDs instead.

Use create_drive_service() to pick the right one for an auth mode.
"""

import os
import uuid

from .auth import authenticate
from .drive_api import (
    build_drive_client,
    find_items_by_name,
    create_folder_drive,
    create_file_drive,
    update_file_drive
)
from .utils import is_debug_enabled

# Prefix marking placeholder IDs handed out in dry-run mode
DRY_RUN_ID_PREFIX = 'dry-run-'


def _content_size(content):
    """Best-effort size of bytes or an open file, for statistics only."""
    if isinstance(content, (bytes, bytearray)):
        return len(content)
    try:
        return os.fstat(content.fileno()).st_size
    except (AttributeError, OSError, ValueError):
        return 0


def _exact_matches(items, name):
    """Keep only items whose name equals `name` exactly, case included."""
    return [item for item in items if item.get('name') == name]


class GoogleDriveService:
    """
    Drive adapter backed by a Drive v3 client.

    The adapter keeps no per-call state: every create_folder() call
    queries Drive again, which is what makes it idempotent.
    """

    def __init__(self, client, stats=None):
        """
        Args:
            client: Drive v3 client (see drive_api.build_drive_client)
            stats (UploadStatistics): Optional statistics collector
        """
        self.client = client
        self.stats = stats

    def create_folder(self, folder_name, parent_id):
        """
        Find or create a folder named `folder_name` directly under `parent_id`.

        An existing non-trashed folder with the exact same name is reused,
        so repeated calls with the same arguments return the same ID.

        Returns:
            str: Folder ID
        """
        existing = _exact_matches(
            find_items_by_name(self.client, folder_name, parent_id, folders_only=True), folder_name
        )
        if existing:
            folder_id = existing[0]['id']
            if is_debug_enabled():
                print(f"[✓] Folder already exists: {folder_name} ({folder_id})")
            if self.stats:
                self.stats.record_folder(reused=True)
            return folder_id

        if is_debug_enabled():
            print(f"[+] Creating folder: {folder_name}")
        folder_id = create_folder_drive(self.client, folder_name, parent_id)['id']
        if self.stats:
            self.stats.record_folder(reused=False)
        return folder_id

    def upload_file(self, file_name, mime_type, parent_id, content, overwrite=False):
        """
        Upload file content under `parent_id`.

        With overwrite, an existing non-trashed file of the same name in the
        same folder is updated in place (name and content) and keeps its ID.
        Without overwrite a new file is always created, even when one with
        the same name already exists.

        Args:
            file_name (str): Remote file name
            mime_type (str): MIME type of the content
            parent_id (str): Parent folder ID
            content (bytes | file-like): File content
            overwrite (bool): Replace a same-named file instead of adding another

        Returns:
            str: File ID
        """
        size = _content_size(content)

        if overwrite:
            existing = _exact_matches(
                find_items_by_name(self.client, file_name, parent_id, folders_only=False), file_name
            )
            if existing:
                file_id = existing[0]['id']
                if is_debug_enabled():
                    print(f"[→] Overwriting existing file: {file_name} ({file_id})")
                update_file_drive(self.client, file_id, file_name, mime_type, content)
                if self.stats:
                    self.stats.record_file(size, replaced=True)
                return file_id

        if is_debug_enabled():
            print(f"[→] Uploading new file: {file_name} ({mime_type})")
        file_id = create_file_drive(self.client, file_name, mime_type, parent_id, content)['id']
        if self.stats:
            self.stats.record_file(size, replaced=False)
        return file_id


class DryRunDriveService:
    """
    Drive adapter for dry runs.

    Never queries or mutates Drive. Returns placeholder IDs of the form
    'dry-run-folder-<hex>' / 'dry-run-file-<hex>' that are usable as
    parent IDs by later calls.
    """

    def __init__(self, stats=None):
        self.stats = stats

    @staticmethod
    def _placeholder_id(kind):
        return f"{DRY_RUN_ID_PREFIX}{kind}-{uuid.uuid4().hex}"

    def create_folder(self, folder_name, parent_id):
        folder_id = self._placeholder_id('folder')
        print(f"[DRY RUN] Would create folder '{folder_name}' in {parent_id}")
        if self.stats:
            self.stats.record_folder(reused=False)
        return folder_id

    def upload_file(self, file_name, mime_type, parent_id, content, overwrite=False):
        file_id = self._placeholder_id('file')
        action = "create or overwrite" if overwrite else "create"
        print(f"[DRY RUN] Would {action} file '{file_name}' ({mime_type}) in {parent_id}")
        if self.stats:
            self.stats.record_file(_content_size(content), replaced=False)
        return file_id


def is_dry_run_id(item_id):
    """True if `item_id` is a dry-run placeholder rather than a real Drive ID."""
    return item_id.startswith(DRY_RUN_ID_PREFIX)


def create_drive_service(auth_mode, stats=None):
    """
    Build the adapter matching the resolved authentication mode.

    Args:
        auth_mode: ServiceAccountKey, WorkloadIdentity or DryRun (see auth.resolve_auth_mode)
        stats (UploadStatistics): Optional statistics collector

    Returns:
        GoogleDriveService | DryRunDriveService
    """
    if auth_mode.is_dry_run:
        return DryRunDriveService(stats=stats)
    return GoogleDriveService(build_drive_client(authenticate(auth_mode)), stats=stats)
