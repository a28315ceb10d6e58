"""Structured Logging"""
from __future__ import annotations

import logging
from typing import Any

import structlog


def resolve_level(level: str) -> int:
    """ログレベル名を数値に変換 (不明な名前は INFO)"""
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str = "INFO") -> None:
    """
    構造化ログを設定

    12-Factor App の Logs 原則に従い、JSON を標準出力に書き出す。
    CloudWatch Logs がそのままイベントストリームとして取り込む。
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def bind_lambda_context(context: Any) -> None:
    """Lambda コンテキストの情報をログコンテキストに設定"""
    structlog.contextvars.clear_contextvars()
    if context is None:
        return

    structlog.contextvars.bind_contextvars(
        aws_request_id=getattr(context, "aws_request_id", None),
        function_name=getattr(context, "function_name", None),
    )
