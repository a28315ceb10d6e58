"""API Gateway Proxy Responses"""
import json
from typing import Any

DEFAULT_HEADERS = {
    'Content-Type': 'application/json',
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type,Authorization',
    'Access-Control-Allow-Methods': 'GET,OPTIONS',
}


def create_response(status_code: int, body: Any, headers: dict = None) -> dict:
    """Lambda レスポンスを作成"""
    response_headers = dict(DEFAULT_HEADERS)
    if headers:
        response_headers.update(headers)

    return {
        'statusCode': status_code,
        'headers': response_headers,
        'body': json.dumps(body, ensure_ascii=False),
    }
