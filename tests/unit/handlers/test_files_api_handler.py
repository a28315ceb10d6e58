"""Files API Lambda Handler Tests"""
import json

import pytest

from src.application.use_cases.files import GetFileMetadataUseCase
from src.domain.files import FileMetadata, S3ObjectRef
from src.handlers.files_api import handler


def _api_event(file_id: str | None, resource: str = "/files/{fileId}", method: str = "GET") -> dict:
    return {
        "resource": resource,
        "httpMethod": method,
        "pathParameters": {"fileId": file_id} if file_id is not None else None,
    }


@pytest.fixture
def stored(repository, fixed_now) -> FileMetadata:
    metadata = FileMetadata(
        file_id="uploads/a b.csv",
        timestamp=fixed_now,
        size=2048,
        bucket="upload-bucket",
    )
    repository.save(metadata)
    return metadata


@pytest.fixture(autouse=True)
def use_case(monkeypatch, repository) -> GetFileMetadataUseCase:
    use_case = GetFileMetadataUseCase(repository)
    monkeypatch.setattr(handler, "get_use_case", lambda: use_case)
    return use_case


class TestFilesApiHandler:
    """lambda_handler のテスト"""

    def test_get_metadata(self, stored, lambda_context):
        """正常: GET /files/{fileId} はメタデータを返す"""
        # Act
        response = handler.lambda_handler(_api_event("uploads%2Fa%20b.csv"), lambda_context)

        # Assert
        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {
            "fileId": "uploads/a b.csv",
            "status": "PROCESSED",
            "timestamp": "2026-10-19T12:00:00+00:00",
            "size": 2048,
            "bucket": "upload-bucket",
        }

    def test_get_status(self, stored, lambda_context):
        """正常: GET /files/{fileId}/status はステータスのみ返す"""
        event = _api_event("uploads%2Fa%20b.csv", resource="/files/{fileId}/status")

        response = handler.lambda_handler(event, lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {
            "fileId": "uploads/a b.csv",
            "status": "PROCESSED",
            "timestamp": "2026-10-19T12:00:00+00:00",
        }

    def test_key_with_literal_percent(self, repository, fixed_now, lambda_context):
        """正常: パスパラメータは 1 回だけデコードされる ("%25" を含むキー)"""
        repository.save(FileMetadata(file_id="100%25.txt", timestamp=fixed_now))

        response = handler.lambda_handler(_api_event("100%2525.txt"), lambda_context)

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["fileId"] == "100%25.txt"

    def test_failed_record_includes_reason(self, repository, fixed_now, lambda_context):
        """正常: FAILED レコードは reason を返す"""
        ref = S3ObjectRef(bucket="upload-bucket", key="broken.csv")
        repository.save(FileMetadata.create_failed(ref, reason="ClientError", now=fixed_now))

        response = handler.lambda_handler(_api_event("broken.csv"), lambda_context)

        body = json.loads(response["body"])
        assert body["status"] == "FAILED"
        assert body["reason"] == "ClientError"

    def test_not_found(self, lambda_context):
        """異常: 存在しない fileId は 404"""
        response = handler.lambda_handler(_api_event("missing.txt"), lambda_context)

        assert response["statusCode"] == 404
        assert json.loads(response["body"])["fileId"] == "missing.txt"

    @pytest.mark.parametrize("file_id", [None, ""])
    def test_missing_file_id(self, file_id, lambda_context):
        """異常: fileId が無ければ 400"""
        response = handler.lambda_handler(_api_event(file_id), lambda_context)

        assert response["statusCode"] == 400

    def test_method_not_allowed(self, lambda_context):
        """異常: GET 以外は 405"""
        response = handler.lambda_handler(_api_event("a.txt", method="DELETE"), lambda_context)

        assert response["statusCode"] == 405

    def test_options_preflight(self, lambda_context):
        response = handler.lambda_handler(_api_event(None, method="OPTIONS"), lambda_context)

        assert response["statusCode"] == 200

    def test_repository_failure_returns_500(self, monkeypatch, failing_repository, lambda_context):
        """異常: テーブル読み取り失敗は 500"""
        monkeypatch.setattr(
            handler, "get_use_case", lambda: GetFileMetadataUseCase(failing_repository)
        )

        response = handler.lambda_handler(_api_event("a.txt"), lambda_context)

        assert response["statusCode"] == 500
        assert json.loads(response["body"]) == {"error": "Internal error", "requestId": "a.txt"}
