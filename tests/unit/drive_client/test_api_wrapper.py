"""Unit tests for drive_client.api_wrapper module."""

import json
import socket
from unittest.mock import Mock, patch

import httplib2
import pytest
from googleapiclient.errors import HttpError

from src.drive_client.api_wrapper import APIWrapper, LIST_PAGE_SIZE, join_fields
from src.drive_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    RemoteFileNotFoundError,
)


def http_error(status, message="error", uri=None):
    content = json.dumps({"error": {"code": status, "message": message}})
    return HttpError(httplib2.Response({"status": status}), content.encode("utf-8"), uri=uri)


@pytest.fixture
def service():
    return Mock()


@pytest.fixture
def wrapper(service):
    return APIWrapper(Mock(), service=service)


class TestJoinFields:
    def test_list(self):
        assert join_fields(["id", "name"]) == "id,name"

    def test_string_passthrough(self):
        assert join_fields("id,name") == "id,name"


class TestLazyService:
    """Service creation is deferred to the first call."""

    @patch('src.drive_client.api_wrapper.build')
    def test_init_does_not_authenticate(self, mock_build):
        auth = Mock()

        APIWrapper(auth)

        auth.get_credentials.assert_not_called()
        mock_build.assert_not_called()

    @patch('src.drive_client.api_wrapper.build')
    def test_first_call_builds_service(self, mock_build):
        auth = Mock()
        mock_build.return_value.files.return_value.get.return_value.execute.return_value = {"id": "a"}

        wrapper = APIWrapper(auth)
        wrapper.get_file("a", ["id"])
        wrapper.get_file("a", ["id"])

        mock_build.assert_called_once_with(
            "drive", "v3", credentials=auth.get_credentials.return_value, cache_discovery=False
        )


class TestGetFile:
    def test_success(self, wrapper, service):
        service.files.return_value.get.return_value.execute.return_value = {"id": "a1"}

        result = wrapper.get_file("a1", ["id", "name"])

        assert result == {"id": "a1"}
        service.files.return_value.get.assert_called_once_with(fileId="a1", fields="id,name")

    def test_404_raises_not_found(self, wrapper, service):
        service.files.return_value.get.return_value.execute.side_effect = http_error(404, "File not found: a1.")

        with pytest.raises(RemoteFileNotFoundError) as exc_info:
            wrapper.get_file("a1", ["id"])

        assert exc_info.value.file_id == "a1"

    def test_401_raises_invalid_credentials(self, wrapper, service):
        service.files.return_value.get.return_value.execute.side_effect = http_error(401)

        with pytest.raises(InvalidCredentialsError):
            wrapper.get_file("a1", ["id"])

    def test_timeout_raises_unreachable(self, wrapper, service):
        service.files.return_value.get.return_value.execute.side_effect = socket.timeout("timed out")

        with pytest.raises(APIUnreachableError):
            wrapper.get_file("a1", ["id"])

    def test_server_not_found_raises_unreachable(self, wrapper, service):
        service.files.return_value.get.return_value.execute.side_effect = (
            httplib2.ServerNotFoundError("Unable to find the server")
        )

        with pytest.raises(APIUnreachableError):
            wrapper.get_file("a1", ["id"])

    def test_other_error_raises_api_access(self, wrapper, service):
        service.files.return_value.get.return_value.execute.side_effect = http_error(500, "Backend Error")

        with pytest.raises(APIAccessError):
            wrapper.get_file("a1", ["id"])

    @patch('time.sleep')
    def test_rate_limit_is_retried(self, mock_sleep, wrapper, service):
        service.files.return_value.get.return_value.execute.side_effect = [
            http_error(429, "Too Many Requests"),
            {"id": "a1"},
        ]

        assert wrapper.get_file("a1", ["id"]) == {"id": "a1"}
        mock_sleep.assert_called_once_with(1)

    @patch('time.sleep')
    def test_404_on_id_containing_429_is_not_retried(self, mock_sleep, wrapper, service):
        """A status code in the file id must not look like a rate limit."""
        execute = service.files.return_value.get.return_value.execute
        execute.side_effect = http_error(
            404,
            "File not found: 1ab429XYZ.",
            uri="https://www.googleapis.com/drive/v3/files/1ab429XYZ?fields=id&alt=json",
        )

        with pytest.raises(RemoteFileNotFoundError) as exc_info:
            wrapper.get_file("1ab429XYZ", ["id"])

        assert exc_info.value.file_id == "1ab429XYZ"
        execute.assert_called_once()
        mock_sleep.assert_not_called()

    @patch('time.sleep')
    def test_forbidden_on_id_containing_429_is_not_retried(self, mock_sleep, wrapper, service):
        execute = service.files.return_value.get.return_value.execute
        execute.side_effect = http_error(
            403,
            "Insufficient permissions",
            uri="https://www.googleapis.com/drive/v3/files/x429?alt=json",
        )

        with pytest.raises(APIAccessError):
            wrapper.get_file("x429", ["id"])

        execute.assert_called_once()
        mock_sleep.assert_not_called()

    @pytest.mark.parametrize("file_id", ["", "  ", "a/b", "x' or '1'='1"])
    def test_invalid_file_id(self, wrapper, service, file_id):
        with pytest.raises(ValueError):
            wrapper.get_file(file_id, ["id"])

        service.files.assert_not_called()


class TestListAllFiles:
    def test_follows_page_tokens(self, wrapper, service):
        list_call = service.files.return_value.list
        list_call.return_value.execute.side_effect = [
            {"files": [{"id": "a"}, {"id": "b"}], "nextPageToken": "t2"},
            {"files": [{"id": "c"}]},
        ]

        result = wrapper.list_all_files("trashed = false", ["nextPageToken", "files(id)"])

        assert [f["id"] for f in result] == ["a", "b", "c"]
        assert list_call.call_count == 2
        first, second = list_call.call_args_list
        assert first.kwargs == {
            "q": "trashed = false",
            "fields": "nextPageToken,files(id)",
            "pageSize": LIST_PAGE_SIZE,
        }
        assert second.kwargs["pageToken"] == "t2"

    def test_empty_listing(self, wrapper, service):
        service.files.return_value.list.return_value.execute.return_value = {}

        assert wrapper.list_all_files("q", "files(id)") == []

    def test_order_by_is_passed(self, wrapper, service):
        list_call = service.files.return_value.list
        list_call.return_value.execute.return_value = {"files": []}

        wrapper.list_all_files("q", "files(id)", order_by="folder")

        assert list_call.call_args.kwargs["orderBy"] == "folder"

    def test_failure_is_translated(self, wrapper, service):
        service.files.return_value.list.return_value.execute.side_effect = http_error(500)

        with pytest.raises(APIAccessError):
            wrapper.list_all_files("q", "files(id)")


class TestUpdateFile:
    def test_success(self, wrapper, service):
        update_call = service.files.return_value.update
        update_call.return_value.execute.return_value = {"id": "a1"}
        body = {"appProperties": {"syncRootId": "root"}}

        result = wrapper.update_file("a1", body, ["id", "appProperties"])

        assert result == {"id": "a1"}
        update_call.assert_called_once_with(fileId="a1", body=body, fields="id,appProperties")

    def test_404_raises_not_found(self, wrapper, service):
        service.files.return_value.update.return_value.execute.side_effect = http_error(404)

        with pytest.raises(RemoteFileNotFoundError):
            wrapper.update_file("a1", {}, ["id"])


class TestSanitizeCredentials:
    def test_masks_tokens(self, wrapper):
        text = "Bearer ya29.abc-def failed for access_token=secret123&x=1"

        sanitized = wrapper._sanitize_credentials(text)

        assert "ya29.abc-def" not in sanitized
        assert "secret123" not in sanitized
        assert "x=1" in sanitized
