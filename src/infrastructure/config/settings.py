"""Application Settings"""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    アプリケーション設定

    12-Factor App の Config 原則に従い、
    すべての設定は環境変数から取得する。
    テーブル名・キューURLは CDK が Lambda 環境変数として注入する。
    """

    # Service
    service_name: str = "file-pipeline"
    environment: str = "development"
    log_level: str = "INFO"

    # AWS
    aws_region: str = "us-east-1"

    # DynamoDB
    table_name: str = "file-pipeline-metadata"

    # SQS (結果メッセージの送信先)
    queue_url: str = ""

    class Config:
        env_prefix = "PIPELINE_"
        env_file = ".env"
        case_sensitive = False

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """設定のシングルトンインスタンスを取得"""
    return Settings()
