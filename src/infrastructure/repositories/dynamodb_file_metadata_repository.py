"""DynamoDB File Metadata Repository Implementation"""
from __future__ import annotations

from typing import Any

import boto3
import structlog
from botocore.exceptions import ClientError

from src.application.ports import IFileMetadataRepository
from src.domain.files import FileMetadata

logger = structlog.get_logger()


class MetadataRepositoryError(Exception):
    """メタデータテーブルへのアクセスエラー"""

    pass


class DynamoDBFileMetadataRepository(IFileMetadataRepository):
    """
    DynamoDB ベースの File Metadata Repository

    パーティションキー fileId の単一テーブル。書き込みは 1 回、以降は読み取りのみ。
    """

    def __init__(
        self,
        table_name: str,
        region: str | None = None,
        dynamodb: Any = None,
    ):
        self.table_name = table_name
        self._dynamodb = dynamodb or boto3.resource("dynamodb", region_name=region)
        self._table = self._dynamodb.Table(table_name)

    def save(self, metadata: FileMetadata) -> None:
        """メタデータを保存"""
        log = logger.bind(table=self.table_name, file_id=metadata.file_id)
        log.info("saving_file_metadata")

        try:
            self._table.put_item(Item=metadata.to_item())
        except ClientError as e:
            log.error(
                "save_file_metadata_failed",
                error_code=e.response.get("Error", {}).get("Code"),
            )
            raise MetadataRepositoryError(
                f"Failed to save metadata for {metadata.file_id}: {e}"
            ) from e

        log.info("file_metadata_saved")

    def find_by_id(self, file_id: str) -> FileMetadata | None:
        """file_id でメタデータを取得"""
        log = logger.bind(table=self.table_name, file_id=file_id)

        try:
            response = self._table.get_item(Key={"fileId": file_id})
        except ClientError as e:
            log.error(
                "find_file_metadata_failed",
                error_code=e.response.get("Error", {}).get("Code"),
            )
            raise MetadataRepositoryError(
                f"Failed to read metadata for {file_id}: {e}"
            ) from e

        item = response.get("Item")
        if not item:
            log.info("file_metadata_not_found")
            return None

        return FileMetadata.from_item(item)
