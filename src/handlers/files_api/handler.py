"""
Files API Lambda

API Gateway (REST, プロキシ統合) からメタデータテーブルを読み取るハンドラ。

GET /files/{fileId}         - メタデータを取得
GET /files/{fileId}/status  - 処理ステータスのみ取得
"""
from functools import lru_cache
from typing import Any
from urllib.parse import unquote

import structlog

from src.application.use_cases.files import (
    FileMetadataNotFoundError,
    GetFileMetadataInput,
    GetFileMetadataUseCase,
)
from src.handlers.responses import create_response
from src.infrastructure.config import get_settings
from src.infrastructure.logging import bind_lambda_context, configure_logging
from src.infrastructure.repositories import DynamoDBFileMetadataRepository

configure_logging(get_settings().log_level)
logger = structlog.get_logger()


@lru_cache()
def get_use_case() -> GetFileMetadataUseCase:
    settings = get_settings()
    return GetFileMetadataUseCase(
        metadata_repository=DynamoDBFileMetadataRepository(
            table_name=settings.table_name,
            region=settings.aws_region,
        ),
    )


def lambda_handler(event: dict, context: Any) -> dict:
    """Lambda エントリポイント"""
    bind_lambda_context(context)

    http_method = event.get('httpMethod') or event.get('requestContext', {}).get('http', {}).get('method', 'GET')
    resource = event.get('resource') or event.get('rawPath') or event.get('path') or ''
    path_params = event.get('pathParameters') or {}

    logger.info('request_received', method=http_method, resource=resource)

    if http_method == 'OPTIONS':
        return create_response(200, {'message': 'OK'})

    if http_method != 'GET':
        return create_response(405, {'error': f'Method not allowed: {http_method}'})

    file_id = unquote(path_params.get('fileId') or '')
    if not file_id:
        return create_response(400, {'error': 'fileId is required'})

    try:
        output = get_use_case().execute(GetFileMetadataInput(file_id=file_id))

    except FileMetadataNotFoundError:
        return create_response(404, {'error': 'File not found', 'fileId': file_id})

    except Exception:
        logger.exception('request_failed', file_id=file_id)
        return create_response(500, {'error': 'Internal error', 'requestId': file_id})

    # ステータスのみ
    if resource.rstrip('/').endswith('/status'):
        return create_response(200, {
            'fileId': output.file_id,
            'status': output.status,
            'timestamp': output.timestamp,
        })

    return create_response(200, output.to_dict())
