"""Process Uploaded File Use Case"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

import structlog

from src.application.ports import IFileMetadataRepository, INotificationPublisher
from src.domain.files import FileMetadata, FileProcessed, FileProcessingFailed, S3ObjectRef

logger = structlog.get_logger()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FileProcessingError(Exception):
    """ファイル処理エラー（失敗したファイルIDを保持）"""

    def __init__(self, file_id: str, message: str):
        super().__init__(message)
        self.file_id = file_id


@dataclass
class ProcessUploadedFileInput:
    """処理入力DTO"""

    objects: list[S3ObjectRef]


@dataclass
class ProcessUploadedFileOutput:
    """処理出力DTO"""

    file_ids: list[str] = field(default_factory=list)
    message_ids: list[str] = field(default_factory=list)


class ProcessUploadedFileUseCase:
    """
    アップロードファイル処理 ユースケース

    1. メタデータレコードを書き込む
    2. 結果メッセージをキューに送信する

    レコード単位で順次処理し、最初の失敗で中断する。
    失敗時はレコードを FAILED で上書きし、失敗メッセージを送信してから例外を送出する。
    """

    def __init__(
        self,
        metadata_repository: IFileMetadataRepository,
        publisher: INotificationPublisher,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self._metadata_repo = metadata_repository
        self._publisher = publisher
        self._clock = clock

    def execute(self, input_data: ProcessUploadedFileInput) -> ProcessUploadedFileOutput:
        """ユースケースを実行"""
        output = ProcessUploadedFileOutput()

        for ref in input_data.objects:
            log = logger.bind(file_id=ref.key, bucket=ref.bucket)
            log.info("process_file_started", size=ref.size)

            try:
                metadata = FileMetadata.create_processed(ref, now=self._clock())
                self._metadata_repo.save(metadata)

                message_id = self._publisher.publish(
                    FileProcessed(
                        file_id=metadata.file_id,
                        bucket=metadata.bucket,
                        size=metadata.size,
                        status=metadata.status.value,
                    )
                )
            except Exception as e:
                log.error("process_file_failed", error=str(e))
                self._record_failure(ref, type(e).__name__)
                raise FileProcessingError(ref.key, f"Failed to process {ref.key}: {e}") from e

            output.file_ids.append(metadata.file_id)
            output.message_ids.append(message_id)
            log.info("process_file_completed", message_id=message_id)

        return output

    def _record_failure(self, ref: S3ObjectRef, reason: str) -> None:
        """
        失敗をテーブルと結果キューに記録

        元のエラーを優先して送出するため、ここでの失敗はログのみ。
        """
        log = logger.bind(file_id=ref.key)

        try:
            self._metadata_repo.save(
                FileMetadata.create_failed(ref, reason=reason, now=self._clock())
            )
        except Exception as e:
            log.error("record_failure_status_failed", error=str(e))

        try:
            self._publisher.publish(
                FileProcessingFailed(file_id=ref.key, bucket=ref.bucket, reason=reason)
            )
        except Exception as e:
            log.error("publish_failure_notification_failed", error=str(e))
