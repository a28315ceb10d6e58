"""
Lambda Handlers for File Pipeline

サーバレス構成のエントリポイント:
- Processor (S3 ObjectCreated → SQS → Lambda → DynamoDB + 結果キュー)
- Files API (API Gateway → DynamoDB 読み取り)
"""
