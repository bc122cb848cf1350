# -*- coding: utf-8 -*-
"""
Google Drive v3 operations.

This module wraps the handful of Drive endpoints the upload step needs.
Every function takes a Drive v3 client (see build_drive_client) as its
first argument and returns the decoded file resource.

Operations used:
- files.list    name lookups under a parent folder
- files.create  folders (metadata only) and files (multipart upload)
- files.update  in-place content replacement (multipart upload)
"""

import io

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from .exceptions import DriveApiError
from .utils import is_debug_enabled

FOLDER_MIME_TYPE = 'application/vnd.google-apps.folder'


def build_drive_client(credentials):
    """
    Build a Drive v3 client around google-auth credentials.

    The discovery document bundled with google-api-python-client is used,
    so building the client does not touch the network.
    """
    return build('drive', 'v3', credentials=credentials, cache_discovery=False)


def execute_drive_request(request, description):
    """
    Execute a prepared Drive request and fail loudly on any HTTP error.

    No retry is attempted: a failed request aborts the upload and the run
    is expected to be re-invoked (folders are found again, not duplicated).

    Args:
        request (googleapiclient.http.HttpRequest): Prepared request
        description (str): Operation name used in logs and errors, e.g. 'files.create'

    Returns:
        dict: Decoded response body

    Raises:
        DriveApiError: If Drive answers with an error status
    """
    if is_debug_enabled():
        print(f"[DEBUG] Drive API {description}")

    try:
        return request.execute()
    except HttpError as e:
        status = e.resp.status
        content = e.content.decode('utf-8', 'replace') if isinstance(e.content, bytes) else str(e.content)
        detail = getattr(e, 'reason', None) or content[:300]
        if is_debug_enabled():
            print(f"[DEBUG] Drive API error response: {content[:500]}")
        raise DriveApiError(
            f"Drive API {description} failed: {status} - {detail}",
            status_code=status,
            response_text=content,
        ) from e


def escape_query_value(value):
    r"""
    Escape a literal for use inside a single-quoted Drive query string.

    Drive query syntax needs backslashes and single quotes escaped:
        O'Brien.txt -> O\'Brien.txt
    """
    return value.replace('\\', '\\\\').replace("'", "\\'")


def _media_body(content, mime_type):
    """Wrap bytes or an open binary file for a single-request multipart upload."""
    if isinstance(content, (bytes, bytearray)):
        content = io.BytesIO(content)
    return MediaIoBaseUpload(content, mimetype=mime_type, resumable=False)


def find_items_by_name(client, name, parent_id, folders_only=None):
    """
    List non-trashed items named `name` directly under `parent_id`.

    Drive's name comparison is not guaranteed to be case-sensitive, so
    callers wanting an exact match must still compare the returned names.

    Args:
        client: Drive v3 client
        name (str): Item name
        parent_id (str): Parent folder ID
        folders_only (bool | None): True for folders only, False for
            non-folders only, None for any item type

    Returns:
        list: Drive file resources, each with 'id' and 'name'
    """
    query = (f"name = '{escape_query_value(name)}' and "
             f"'{escape_query_value(parent_id)}' in parents and trashed = false")
    if folders_only is True:
        query += f" and mimeType = '{FOLDER_MIME_TYPE}'"
    elif folders_only is False:
        query += f" and mimeType != '{FOLDER_MIME_TYPE}'"

    request = client.files().list(
        q=query,
        fields='files(id, name)',
        spaces='drive',
        supportsAllDrives=True,
        includeItemsFromAllDrives=True,
    )
    files = execute_drive_request(request, 'files.list').get('files', [])

    if is_debug_enabled():
        print(f"[DEBUG] Found {len(files)} item(s) named '{name}' in {parent_id}")

    return files


def create_folder_drive(client, folder_name, parent_id):
    """
    Create a folder using the Drive API.

    Note:
        Drive allows duplicate names; callers wanting find-or-create
        semantics must query first (see GoogleDriveService.create_folder).

    Returns:
        dict: Created folder resource with 'id' and 'name'
    """
    request = client.files().create(
        body={
            'name': folder_name,
            'mimeType': FOLDER_MIME_TYPE,
            'parents': [parent_id],
        },
        fields='id, name',
        supportsAllDrives=True,
    )
    folder = execute_drive_request(request, 'files.create')
    if is_debug_enabled():
        print(f"[DEBUG] Folder created: {folder.get('id')}")
    return folder


def create_file_drive(client, file_name, mime_type, parent_id, content):
    """
    Create a file with content in a single multipart upload.

    Args:
        client: Drive v3 client
        file_name (str): Name of the new file
        mime_type (str): MIME type of the content
        parent_id (str): Parent folder ID
        content (bytes | file-like): File content; file objects must be opened in binary mode

    Returns:
        dict: Created file resource with 'id' and 'name'
    """
    request = client.files().create(
        body={'name': file_name, 'parents': [parent_id]},
        media_body=_media_body(content, mime_type),
        fields='id, name',
        supportsAllDrives=True,
    )
    return execute_drive_request(request, 'files.create')


def update_file_drive(client, file_id, file_name, mime_type, content):
    """
    Replace the name and content of an existing file, keeping its ID.

    Returns:
        dict: Updated file resource with 'id' and 'name'
    """
    request = client.files().update(
        fileId=file_id,
        body={'name': file_name},
        media_body=_media_body(content, mime_type),
        fields='id, name',
        supportsAllDrives=True,
    )
    return execute_drive_request(request, 'files.update')
