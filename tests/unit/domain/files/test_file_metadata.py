"""FileMetadata / S3ObjectRef Unit Tests"""
import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from src.domain.files import (
    FileMetadata,
    FileProcessed,
    FileProcessingFailed,
    InvalidS3EventError,
    ProcessingStatus,
    S3ObjectRef,
)


class TestS3ObjectRef:
    """S3ObjectRef のテスト"""

    def test_from_s3_record(self, s3_record_factory):
        """正常: 通知レコードから生成できる"""
        # Arrange
        record = s3_record_factory(key="uploads/report.pdf", size=2048, bucket="my-bucket")

        # Act
        ref = S3ObjectRef.from_s3_record(record)

        # Assert
        assert ref.bucket == "my-bucket"
        assert ref.key == "uploads/report.pdf"
        assert ref.size == 2048
        assert ref.event_name == "ObjectCreated:Put"
        assert ref.uri == "s3://my-bucket/uploads/report.pdf"

    def test_key_is_url_decoded(self, s3_record_factory):
        """正常: URL エンコードされたキーをデコードする"""
        record = s3_record_factory(key="uploads/annual+report+%282026%29.pdf")

        ref = S3ObjectRef.from_s3_record(record)

        assert ref.key == "uploads/annual report (2026).pdf"

    def test_missing_size_defaults_to_zero(self, s3_record_factory):
        """正常: size が無い場合 (削除マーカー等) は 0"""
        record = s3_record_factory()
        del record["s3"]["object"]["size"]

        ref = S3ObjectRef.from_s3_record(record)

        assert ref.size == 0

    def test_missing_s3_section(self):
        """異常: s3 セクションが無い"""
        with pytest.raises(InvalidS3EventError):
            S3ObjectRef.from_s3_record({"eventName": "ObjectCreated:Put"})

    def test_missing_object_key(self, s3_record_factory):
        """異常: オブジェクトキーが無い"""
        record = s3_record_factory()
        del record["s3"]["object"]["key"]

        with pytest.raises(InvalidS3EventError):
            S3ObjectRef.from_s3_record(record)

    @pytest.mark.parametrize(
        "record",
        [
            "not-a-record",
            None,
            {"s3": {"object": "x"}},
            {"s3": {"object": None, "bucket": {"name": "b"}}},
            {"s3": {"object": {"key": "a.txt"}, "bucket": "b"}},
            {"s3": {"object": {"key": 123}}},
        ],
    )
    def test_malformed_shapes(self, record):
        """異常: 想定外の型は InvalidS3EventError"""
        with pytest.raises(InvalidS3EventError):
            S3ObjectRef.from_s3_record(record)

    def test_missing_bucket_is_empty(self, s3_record_factory):
        """正常: バケット情報が無い場合は空文字"""
        record = s3_record_factory()
        del record["s3"]["bucket"]

        ref = S3ObjectRef.from_s3_record(record)

        assert ref.bucket == ""
        assert ref.key == "uploads/report.pdf"

    @pytest.mark.parametrize("size", [-1, "abc"])
    def test_invalid_size(self, s3_record_factory, size):
        """異常: サイズが不正"""
        record = s3_record_factory()
        record["s3"]["object"]["size"] = size

        with pytest.raises(InvalidS3EventError):
            S3ObjectRef.from_s3_record(record)


class TestFileMetadata:
    """FileMetadata のテスト"""

    @pytest.fixture
    def ref(self) -> S3ObjectRef:
        return S3ObjectRef(bucket="upload-bucket", key="uploads/a.csv", size=512)

    def test_create_processed(self, ref, fixed_now):
        """正常: 処理済みレコードを作成できる"""
        # Act
        metadata = FileMetadata.create_processed(ref, now=fixed_now)

        # Assert
        assert metadata.file_id == "uploads/a.csv"
        assert metadata.status == ProcessingStatus.PROCESSED
        assert metadata.timestamp == fixed_now
        assert metadata.size == 512
        assert metadata.bucket == "upload-bucket"

    def test_create_failed(self, ref, fixed_now):
        """正常: 失敗レコードは FAILED と理由を持つ"""
        metadata = FileMetadata.create_failed(ref, reason="ClientError", now=fixed_now)

        assert metadata.status == ProcessingStatus.FAILED
        assert metadata.to_item()["reason"] == "ClientError"
        assert FileMetadata.from_item(metadata.to_item()).reason == "ClientError"

    def test_file_id_is_required(self):
        """異常: file_id が空"""
        with pytest.raises(ValueError):
            FileMetadata(file_id="")

    def test_to_item(self, ref, fixed_now):
        """正常: DynamoDB アイテムに変換できる"""
        metadata = FileMetadata.create_processed(ref, now=fixed_now)

        item = metadata.to_item()

        assert item == {
            "fileId": "uploads/a.csv",
            "status": "PROCESSED",
            "timestamp": "2026-10-19T12:00:00+00:00",
            "size": 512,
            "bucket": "upload-bucket",
        }

    def test_from_item_converts_decimal(self):
        """正常: Decimal の size を int に戻す"""
        item = {
            "fileId": "uploads/a.csv",
            "status": "PROCESSED",
            "timestamp": "2026-10-19T12:00:00+00:00",
            "size": Decimal("512"),
        }

        metadata = FileMetadata.from_item(item)

        assert metadata.size == 512
        assert isinstance(metadata.size, int)
        assert metadata.timestamp == datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
        assert metadata.bucket == ""

    def test_to_dict_uses_camel_case(self, ref, fixed_now):
        """正常: API 向けの辞書は camelCase"""
        data = FileMetadata.create_processed(ref, now=fixed_now).to_dict()

        assert data["fileId"] == "uploads/a.csv"
        assert data["status"] == "PROCESSED"


class TestFileProcessed:
    """FileProcessed イベントのテスト"""

    def test_event_type(self):
        assert FileProcessed(file_id="a.txt").event_type == "FileProcessed"

    def test_to_message(self):
        """正常: JSON メッセージに変換できる"""
        event = FileProcessed(file_id="uploads/a.txt", bucket="b", size=10)

        body = json.loads(event.to_message())

        assert body["eventType"] == "FileProcessed"
        assert body["eventId"] == str(event.event_id)
        assert body["fileId"] == "uploads/a.txt"
        assert body["size"] == 10
        assert body["status"] == "PROCESSED"

    def test_failed_event_message(self):
        """正常: 失敗イベントは FAILED と理由を含む"""
        event = FileProcessingFailed(file_id="uploads/a.txt", bucket="b", reason="ClientError")

        body = json.loads(event.to_message())

        assert body["eventType"] == "FileProcessingFailed"
        assert body["status"] == "FAILED"
        assert body["reason"] == "ClientError"
