"""Repository Interfaces (Ports)"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.domain.files.entities import FileMetadata


class IFileMetadataRepository(ABC):
    """
    File Metadata Repository Interface

    依存性逆転の原則に従い、ユースケースから参照可能な抽象インターフェース。
    具体的な実装（DynamoDB等）はインフラ層で提供する。
    """

    @abstractmethod
    def save(self, metadata: FileMetadata) -> None:
        """メタデータを保存（同一 file_id は上書き）"""
        pass

    @abstractmethod
    def find_by_id(self, file_id: str) -> FileMetadata | None:
        """file_id でメタデータを取得"""
        pass
