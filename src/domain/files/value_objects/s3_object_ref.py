"""S3 Object Reference Value Object"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote_plus


class InvalidS3EventError(ValueError):
    """S3 イベントレコードの形式不正エラー"""

    pass


@dataclass(frozen=True)
class S3ObjectRef:
    """
    S3 オブジェクト参照（値オブジェクト）

    S3 ObjectCreated 通知の 1 レコードから、処理対象オブジェクトを特定する。
    """

    bucket: str
    key: str
    size: int = 0
    etag: str = ""
    event_name: str = ""
    event_time: str = ""

    def __post_init__(self) -> None:
        """バリデーション"""
        if not self.key:
            raise InvalidS3EventError("Object key is required")

        if self.size < 0:
            raise InvalidS3EventError("Object size cannot be negative")

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"

    @classmethod
    def from_s3_record(cls, record: dict[str, Any]) -> S3ObjectRef:
        """
        S3 通知レコードから生成

        通知内のキーは URL エンコードされている（スペースは '+'）ためデコードする。
        バケット名が無いレコードは bucket="" として扱う。
        """
        if not isinstance(record, dict):
            raise InvalidS3EventError(f"Record is not an object: {record!r}")

        s3 = record.get("s3")
        if not isinstance(s3, dict):
            raise InvalidS3EventError("Record has no 's3' section")

        obj = s3.get("object")
        if not isinstance(obj, dict):
            raise InvalidS3EventError("Record has no 's3.object' section")

        bucket = s3.get("bucket", {})
        if not isinstance(bucket, dict):
            raise InvalidS3EventError("Record 's3.bucket' is not an object")

        raw_key = obj.get("key")
        if not raw_key or not isinstance(raw_key, str):
            raise InvalidS3EventError("Record has no object key")

        try:
            size = int(obj.get("size", 0))
        except (TypeError, ValueError) as e:
            raise InvalidS3EventError(f"Invalid object size: {obj.get('size')!r}") from e

        return cls(
            bucket=bucket.get("name", ""),
            key=unquote_plus(raw_key),
            size=size,
            etag=obj.get("eTag", ""),
            event_name=record.get("eventName", ""),
            event_time=record.get("eventTime", ""),
        )
