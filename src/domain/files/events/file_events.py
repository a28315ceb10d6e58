"""File Domain Events"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """ドメインイベント基底クラス"""

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=_utc_now)

    @property
    def event_type(self) -> str:
        return self.__class__.__name__

    def payload(self) -> dict[str, Any]:
        """イベント固有のデータ"""
        return {}

    def to_message(self) -> str:
        """SQS メッセージ本文（JSON）に変換"""
        return json.dumps(
            {
                "eventId": str(self.event_id),
                "eventType": self.event_type,
                "occurredAt": self.occurred_at.isoformat(),
                **self.payload(),
            },
            ensure_ascii=False,
        )


@dataclass(frozen=True)
class FileProcessed(DomainEvent):
    """ファイル処理完了イベント（結果キューに送信される）"""

    file_id: str = ""
    bucket: str = ""
    size: int = 0
    status: str = "PROCESSED"

    def payload(self) -> dict[str, Any]:
        return {
            "fileId": self.file_id,
            "bucket": self.bucket,
            "size": self.size,
            "status": self.status,
        }


@dataclass(frozen=True)
class FileProcessingFailed(DomainEvent):
    """ファイル処理失敗イベント（結果キューに送信される）"""

    file_id: str = ""
    bucket: str = ""
    reason: str = ""
    status: str = "FAILED"

    def payload(self) -> dict[str, Any]:
        return {
            "fileId": self.file_id,
            "bucket": self.bucket,
            "reason": self.reason,
            "status": self.status,
        }
