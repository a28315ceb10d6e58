"""
File Processor Lambda

アップロードされたオブジェクトを処理する Lambda ハンドラ。

フロー:
- S3 ObjectCreated 通知 (直接 or SQS 経由) を受信
- メタデータを DynamoDB に書き込み
- 処理結果メッセージを SQS に送信

レスポンス:
- 200: {"success": true, "fileId": ..., "fileIds": [...]}
- 400: 不正なイベント
- 500: 処理中のエラー (詳細はログのみ)

SQS 経由の場合はメッセージ単位で処理し、失敗したメッセージを
batchItemFailures として返す (ReportBatchItemFailures)。
成功したメッセージのみキューから削除され、失敗分は再配信後に DLQ へ送られる。
"""
import json
from functools import lru_cache
from typing import Any

import structlog

from src.application.use_cases.files import (
    FileProcessingError,
    ProcessUploadedFileInput,
    ProcessUploadedFileUseCase,
)
from src.domain.files import InvalidS3EventError, S3ObjectRef
from src.handlers.responses import create_response
from src.infrastructure.config import get_settings
from src.infrastructure.logging import bind_lambda_context, configure_logging
from src.infrastructure.messaging import SqsNotificationPublisher
from src.infrastructure.repositories import DynamoDBFileMetadataRepository

configure_logging(get_settings().log_level)
logger = structlog.get_logger()

SQS_EVENT_SOURCE = 'aws:sqs'
S3_TEST_EVENT = 's3:TestEvent'


@lru_cache()
def get_use_case() -> ProcessUploadedFileUseCase:
    """ユースケースを組み立てる（コールドスタート時に 1 回）"""
    settings = get_settings()
    return ProcessUploadedFileUseCase(
        metadata_repository=DynamoDBFileMetadataRepository(
            table_name=settings.table_name,
            region=settings.aws_region,
        ),
        publisher=SqsNotificationPublisher(
            queue_url=settings.queue_url,
            region=settings.aws_region,
        ),
    )


def objects_from_sqs_record(record: dict) -> list[S3ObjectRef]:
    """
    SQS レコード (本文が S3 通知) から S3 オブジェクト参照を取り出す

    S3 が通知設定時に送る s3:TestEvent は空リストを返す。
    """
    try:
        body = json.loads(record.get('body') or '{}')
    except (json.JSONDecodeError, TypeError) as e:
        raise InvalidS3EventError(f'SQS message body is not JSON: {e}') from e

    if not isinstance(body, dict):
        raise InvalidS3EventError(f'SQS message body is not an object: {body!r}')

    if body.get('Event') == S3_TEST_EVENT:
        logger.info('s3_test_event_skipped', message_id=record.get('messageId'))
        return []

    records = body.get('Records', [])
    if not isinstance(records, list):
        raise InvalidS3EventError('SQS message body Records is not a list')

    return [S3ObjectRef.from_s3_record(r) for r in records]


def extract_s3_objects(event: dict) -> list[S3ObjectRef]:
    """S3 から直接届いたイベントから S3 オブジェクト参照を取り出す"""
    records = event.get('Records') if isinstance(event, dict) else None
    if not isinstance(records, list):
        return []

    return [S3ObjectRef.from_s3_record(r) for r in records]


def is_sqs_batch(event: dict) -> bool:
    records = event.get('Records') if isinstance(event, dict) else None
    return isinstance(records, list) and any(
        isinstance(r, dict) and r.get('eventSource') == SQS_EVENT_SOURCE for r in records
    )


def _batch_failures(response: dict, message_ids: list[str]) -> dict:
    response['batchItemFailures'] = [{'itemIdentifier': m} for m in message_ids]
    return response


def _run(objects: list[S3ObjectRef]) -> list[str]:
    """ユースケースを実行し、失敗時は失敗したファイルIDを持つ FileProcessingError を送出"""
    try:
        return get_use_case().execute(ProcessUploadedFileInput(objects=objects)).file_ids
    except FileProcessingError:
        raise
    except Exception as e:
        raise FileProcessingError(objects[0].key, str(e)) from e


def handle_sqs_batch(records: list) -> dict:
    """
    SQS バッチをメッセージ単位で処理

    不正なメッセージと処理に失敗したメッセージは batchItemFailures に含める。
    """
    failed_message_ids = []
    messages = []
    for record in records:
        message_id = record.get('messageId') if isinstance(record, dict) else None
        try:
            if not isinstance(record, dict) or record.get('eventSource') != SQS_EVENT_SOURCE:
                raise InvalidS3EventError(f'Unexpected record in SQS batch: {record!r}')
            objects = objects_from_sqs_record(record)
        except InvalidS3EventError as e:
            logger.warning('invalid_message', message_id=message_id, error=str(e))
            if message_id:
                failed_message_ids.append(message_id)
            continue

        if objects:
            messages.append((message_id, objects))

    if not messages:
        return _batch_failures(
            create_response(400, {'error': 'Invalid event'}), failed_message_ids
        )

    logger.info('event_received', message_count=len(messages))

    file_ids = []
    first_failed_file_id = None
    for message_id, objects in messages:
        try:
            file_ids.extend(_run(objects))
        except FileProcessingError as e:
            logger.exception('processing_failed', file_id=e.file_id, message_id=message_id)
            first_failed_file_id = first_failed_file_id or e.file_id
            if message_id:
                failed_message_ids.append(message_id)

    if first_failed_file_id:
        response = create_response(500, {'error': 'Internal error', 'requestId': first_failed_file_id})
    else:
        response = create_response(200, {
            'success': True,
            'fileId': file_ids[0],
            'fileIds': file_ids,
        })

    return _batch_failures(response, failed_message_ids)


def lambda_handler(event: dict, context: Any) -> dict:
    """Lambda エントリポイント"""
    bind_lambda_context(context)

    if is_sqs_batch(event):
        return handle_sqs_batch(event['Records'])

    try:
        objects = extract_s3_objects(event)
    except InvalidS3EventError as e:
        logger.warning('invalid_event', error=str(e))
        return create_response(400, {'error': 'Invalid event'})

    if not objects:
        logger.warning('invalid_event', error='No S3 records')
        return create_response(400, {'error': 'Invalid event'})

    logger.info('event_received', object_count=len(objects))

    try:
        file_ids = _run(objects)
    except FileProcessingError as e:
        logger.exception('processing_failed', file_id=e.file_id)
        return create_response(500, {'error': 'Internal error', 'requestId': e.file_id})

    return create_response(200, {
        'success': True,
        'fileId': file_ids[0],
        'fileIds': file_ids,
    })
