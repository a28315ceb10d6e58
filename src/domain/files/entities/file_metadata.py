"""FileMetadata Entity"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any

from ..value_objects.s3_object_ref import S3ObjectRef


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProcessingStatus(str, Enum):
    """処理ステータス"""

    PROCESSED = "PROCESSED"
    FAILED = "FAILED"


@dataclass
class FileMetadata:
    """
    ファイルメタデータ（エンティティ）

    アップロードされたオブジェクト 1 件に対する処理結果レコード。
    パーティションキーは file_id（= デコード済みのオブジェクトキー）。
    """

    file_id: str
    status: ProcessingStatus = ProcessingStatus.PROCESSED
    timestamp: datetime = field(default_factory=_utc_now)
    size: int = 0
    bucket: str = ""
    reason: str = ""

    def __post_init__(self) -> None:
        if not self.file_id:
            raise ValueError("file_id is required")

    @classmethod
    def create_processed(
        cls,
        ref: S3ObjectRef,
        now: datetime | None = None,
    ) -> FileMetadata:
        """処理済みレコードを作成"""
        return cls(
            file_id=ref.key,
            status=ProcessingStatus.PROCESSED,
            timestamp=now or _utc_now(),
            size=ref.size,
            bucket=ref.bucket,
        )

    @classmethod
    def create_failed(
        cls,
        ref: S3ObjectRef,
        reason: str,
        now: datetime | None = None,
    ) -> FileMetadata:
        """処理失敗レコードを作成"""
        return cls(
            file_id=ref.key,
            status=ProcessingStatus.FAILED,
            timestamp=now or _utc_now(),
            size=ref.size,
            bucket=ref.bucket,
            reason=reason,
        )

    @property
    def timestamp_iso(self) -> str:
        return self.timestamp.isoformat()

    def to_item(self) -> dict[str, Any]:
        """DynamoDB アイテムに変換"""
        item = {
            "fileId": self.file_id,
            "status": self.status.value,
            "timestamp": self.timestamp_iso,
            "size": self.size,
            "bucket": self.bucket,
        }
        if self.reason:
            item["reason"] = self.reason
        return item

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> FileMetadata:
        """
        DynamoDB アイテムから生成

        boto3 resource は数値を Decimal で返すため int に戻す。
        """
        size = item.get("size", 0)
        if isinstance(size, Decimal):
            size = int(size)

        return cls(
            file_id=item["fileId"],
            status=ProcessingStatus(item.get("status", ProcessingStatus.PROCESSED.value)),
            timestamp=datetime.fromisoformat(item["timestamp"]),
            size=size,
            bucket=item.get("bucket", ""),
            reason=item.get("reason", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        """API レスポンス用の辞書に変換"""
        return self.to_item()
