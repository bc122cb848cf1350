"""Shared test helpers for drive_upload tests."""

from __future__ import annotations

import json
import re
from typing import Any, Callable

import httplib2
from googleapiclient.errors import HttpError

from drive_upload.drive_api import FOLDER_MIME_TYPE


def make_http_error(status: int, message: str) -> HttpError:
    """Build the error googleapiclient raises for a JSON error response."""
    resp = httplib2.Response({"status": status, "content-type": "application/json"})
    content = json.dumps({"error": {"code": status, "message": message}}).encode("utf-8")
    return HttpError(resp, content)


def _unescape(value: str) -> str:
    return re.sub(r"\\(.)", r"\1", value)


class FakeRequest:
    """Stand-in for googleapiclient.http.HttpRequest."""

    def __init__(self, handler: Callable[[], dict[str, Any]]) -> None:
        self._handler = handler

    def execute(self) -> dict[str, Any]:
        return self._handler()


class FakeDriveClient:
    """
    In-memory Drive v3 answering the files() calls drive_api makes.

    Items are stored by ID; every prepared request is recorded in `calls`
    as (operation, kwargs) so tests can count remote round-trips. Like
    Drive itself, name queries match without regard to case.
    """

    def __init__(self) -> None:
        self.items: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._next_id = 1

    def add_item(self, name: str, parent: str, folder: bool = False,
                 content: bytes = b"", trashed: bool = False) -> str:
        item_id = f"id-{self._next_id}"
        self._next_id += 1
        self.items[item_id] = {
            "id": item_id,
            "name": name,
            "mimeType": FOLDER_MIME_TYPE if folder else "application/octet-stream",
            "parents": [parent],
            "content": content,
            "trashed": trashed,
        }
        return item_id

    def children(self, parent: str) -> list[dict[str, Any]]:
        return [i for i in self.items.values() if parent in i["parents"] and not i["trashed"]]

    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]

    def files(self) -> FakeDriveClient:
        return self

    def list(self, **kwargs: Any) -> FakeRequest:
        self.calls.append(("list", kwargs))
        return FakeRequest(lambda: self._list(kwargs["q"]))

    def create(self, **kwargs: Any) -> FakeRequest:
        self.calls.append(("create", kwargs))
        return FakeRequest(lambda: self._create(kwargs["body"], kwargs.get("media_body")))

    def update(self, **kwargs: Any) -> FakeRequest:
        self.calls.append(("update", kwargs))
        return FakeRequest(
            lambda: self._update(kwargs["fileId"], kwargs["body"], kwargs["media_body"])
        )

    @staticmethod
    def _read_media(media_body: Any) -> bytes:
        return media_body.getbytes(0, media_body.size())

    def _list(self, query: str) -> dict[str, Any]:
        name = _unescape(re.search(r"name = '((?:[^'\\]|\\.)*)'", query).group(1))
        parent = re.search(r"'([^']*)' in parents", query).group(1)
        matches = [i for i in self.children(parent) if i["name"].lower() == name.lower()]
        if f"mimeType = '{FOLDER_MIME_TYPE}'" in query:
            matches = [i for i in matches if i["mimeType"] == FOLDER_MIME_TYPE]
        elif f"mimeType != '{FOLDER_MIME_TYPE}'" in query:
            matches = [i for i in matches if i["mimeType"] != FOLDER_MIME_TYPE]
        return {"files": [{"id": i["id"], "name": i["name"]} for i in matches]}

    def _create(self, body: dict[str, Any], media_body: Any) -> dict[str, Any]:
        folder = body.get("mimeType") == FOLDER_MIME_TYPE
        content = b"" if media_body is None else self._read_media(media_body)
        item_id = self.add_item(body["name"], body["parents"][0], folder=folder, content=content)
        return {"id": item_id, "name": body["name"]}

    def _update(self, file_id: str, body: dict[str, Any], media_body: Any) -> dict[str, Any]:
        if file_id not in self.items:
            raise make_http_error(404, f"File not found: {file_id}.")
        self.items[file_id]["name"] = body["name"]
        self.items[file_id]["content"] = self._read_media(media_body)
        return {"id": file_id, "name": body["name"]}
