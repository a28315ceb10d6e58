"""Shared Test Fixtures"""
import json
from datetime import datetime, timezone

import pytest

from src.application.ports import IFileMetadataRepository, INotificationPublisher
from src.domain.files import FileMetadata, FileProcessed

FIXED_NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class InMemoryFileMetadataRepository(IFileMetadataRepository):
    """テスト用インメモリ Repository"""

    def __init__(self):
        self.items: dict[str, FileMetadata] = {}

    def save(self, metadata: FileMetadata) -> None:
        self.items[metadata.file_id] = metadata

    def find_by_id(self, file_id: str) -> FileMetadata | None:
        return self.items.get(file_id)


class FailingFileMetadataRepository(InMemoryFileMetadataRepository):
    """保存に必ず失敗する Repository"""

    def save(self, metadata: FileMetadata) -> None:
        raise RuntimeError("table unavailable")

    def find_by_id(self, file_id: str) -> FileMetadata | None:
        raise RuntimeError("table unavailable")


class RecordingPublisher(INotificationPublisher):
    """送信イベントを記録する Publisher"""

    def __init__(self):
        self.events = []

    def publish(self, event) -> str:
        self.events.append(event)
        return f"msg-{len(self.events)}"


class FailingPublisher(RecordingPublisher):
    """指定したファイルの処理完了メッセージだけ送信に失敗する Publisher"""

    def __init__(self, fail_on=()):
        super().__init__()
        self.fail_on = set(fail_on)

    def publish(self, event) -> str:
        if isinstance(event, FileProcessed) and event.file_id in self.fail_on:
            raise RuntimeError("queue unavailable")
        return super().publish(event)


def make_s3_record(
    key: str = "uploads/report.pdf",
    size: int = 1024,
    bucket: str = "upload-bucket",
) -> dict:
    """S3 ObjectCreated 通知レコードを作成"""
    return {
        "eventVersion": "2.1",
        "eventSource": "aws:s3",
        "awsRegion": "us-east-1",
        "eventTime": "2026-10-19T12:00:00.000Z",
        "eventName": "ObjectCreated:Put",
        "s3": {
            "s3SchemaVersion": "1.0",
            "bucket": {"name": bucket, "arn": f"arn:aws:s3:::{bucket}"},
            "object": {"key": key, "size": size, "eTag": "d41d8cd98f00b204e9800998ecf8427e"},
        },
    }


def make_sqs_record(body: dict, message_id: str = "m-1") -> dict:
    """S3 通知を本文に持つ SQS レコードを作成"""
    return {
        "messageId": message_id,
        "eventSource": "aws:sqs",
        "eventSourceARN": "arn:aws:sqs:us-east-1:123456789012:ingest",
        "body": json.dumps(body),
    }


@pytest.fixture
def s3_event() -> dict:
    """S3 から直接届くイベント"""
    return {"Records": [make_s3_record()]}


@pytest.fixture
def sqs_event() -> dict:
    """SQS 経由で届くイベント"""
    return {"Records": [make_sqs_record({"Records": [make_s3_record()]})]}


@pytest.fixture
def repository() -> InMemoryFileMetadataRepository:
    return InMemoryFileMetadataRepository()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


class FakeLambdaContext:
    aws_request_id = "req-123"
    function_name = "file-processor"


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    return FakeLambdaContext()


@pytest.fixture
def failing_repository() -> FailingFileMetadataRepository:
    return FailingFileMetadataRepository()


@pytest.fixture
def failing_publisher_factory():
    return FailingPublisher


@pytest.fixture
def s3_record_factory():
    return make_s3_record


@pytest.fixture
def sqs_record_factory():
    return make_sqs_record


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
