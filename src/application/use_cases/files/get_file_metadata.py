"""Get File Metadata Use Case"""
from __future__ import annotations

from dataclasses import dataclass

import structlog

from src.application.ports import IFileMetadataRepository

logger = structlog.get_logger()


class FileMetadataNotFoundError(Exception):
    """メタデータが見つからないエラー"""

    pass


@dataclass
class GetFileMetadataInput:
    """取得入力DTO"""

    file_id: str


@dataclass
class GetFileMetadataOutput:
    """取得出力DTO"""

    file_id: str
    status: str
    timestamp: str
    size: int
    bucket: str = ""
    reason: str = ""

    def to_dict(self) -> dict:
        data = {
            "fileId": self.file_id,
            "status": self.status,
            "timestamp": self.timestamp,
            "size": self.size,
            "bucket": self.bucket,
        }
        if self.reason:
            data["reason"] = self.reason
        return data


class GetFileMetadataUseCase:
    """
    ファイルメタデータ取得 ユースケース

    メタデータテーブルからレコードを取得して返す。
    """

    def __init__(self, metadata_repository: IFileMetadataRepository):
        self._metadata_repo = metadata_repository

    def execute(self, input_data: GetFileMetadataInput) -> GetFileMetadataOutput:
        """ユースケースを実行"""
        log = logger.bind(file_id=input_data.file_id)
        log.info("get_file_metadata_started")

        metadata = self._metadata_repo.find_by_id(input_data.file_id)
        if not metadata:
            log.warning("file_metadata_not_found")
            raise FileMetadataNotFoundError(f"File not found: {input_data.file_id}")

        log.info("get_file_metadata_completed", status=metadata.status.value)

        return GetFileMetadataOutput(
            file_id=metadata.file_id,
            status=metadata.status.value,
            timestamp=metadata.timestamp_iso,
            size=metadata.size,
            bucket=metadata.bucket,
            reason=metadata.reason,
        )
