"""
S3-compatible Object Storage (MinIO, AWS S3, Supabase Storage).
Guarda as faturas em PDF; toda chave recebe o prefixo PRIVATE_OBJECT_DIR.
"""
import logging
from io import BytesIO
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from energia_livre.core.config import settings

logger = logging.getLogger(__name__)

_client = None


def is_storage_configured() -> bool:
    """Return True if S3 bucket and credentials are set."""
    return bool(
        settings.S3_BUCKET
        and settings.S3_ENDPOINT
        and settings.S3_ACCESS_KEY
        and settings.S3_SECRET_KEY
    )


def _get_client():
    """Lazy boto3 client; returns None if storage is not configured."""
    global _client
    if not is_storage_configured():
        return None
    if _client is None:
        config = Config(signature_version="s3v4", region_name=settings.S3_REGION or "us-east-1")
        _client = boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT,
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
            config=config,
        )
    return _client


def put_object(path: str, data: bytes, content_type: str = "application/pdf") -> bool:
    """Grava os bytes em `path` (caminho lógico, sem o prefixo privado)."""
    client = _get_client()
    if not client:
        logger.error("Storage não configurado; upload ignorado")
        return False
    key = settings.object_key(path)
    try:
        client.put_object(Bucket=settings.S3_BUCKET, Key=key, Body=data, ContentType=content_type)
        return True
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Upload failed for {settings.S3_BUCKET}/{key}: {e}")
        return False


def get_object(path: str) -> Optional[bytes]:
    """Download object to bytes. Returns None when missing or on failure."""
    client = _get_client()
    if not client:
        return None
    key = settings.object_key(path)
    try:
        buf = BytesIO()
        client.download_fileobj(settings.S3_BUCKET, key, buf)
        return buf.getvalue()
    except (BotoCoreError, ClientError) as e:
        logger.warning(f"Download failed for {settings.S3_BUCKET}/{key}: {e}")
        return None


def delete_object(path: str) -> bool:
    client = _get_client()
    if not client:
        return False
    key = settings.object_key(path)
    try:
        client.delete_object(Bucket=settings.S3_BUCKET, Key=key)
        return True
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Delete failed for {settings.S3_BUCKET}/{key}: {e}")
        return False


def move_object(src_path: str, dst_path: str) -> bool:
    """Copia para o destino e remove a origem. S3 não tem rename."""
    client = _get_client()
    if not client:
        return False
    src_key = settings.object_key(src_path)
    dst_key = settings.object_key(dst_path)
    try:
        client.copy_object(
            Bucket=settings.S3_BUCKET,
            Key=dst_key,
            CopySource={"Bucket": settings.S3_BUCKET, "Key": src_key},
        )
        client.delete_object(Bucket=settings.S3_BUCKET, Key=src_key)
        return True
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Move failed {src_key} -> {dst_key}: {e}")
        return False
