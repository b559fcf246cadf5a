"""
Faturas em PDF no object storage.

Upload vai para uma pasta temporária do usuário; depois que a intenção é criada,
o arquivo é movido para a pasta da comercializadora de destino.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Optional, Tuple

from fastapi import HTTPException, status

from energia_livre.core.config import settings
from energia_livre.models.user import ROLE_USER, User
from energia_livre.services import storage

logger = logging.getLogger(__name__)

INVOICE_ROOT = "invoices"
TEMP_FOLDER = "temp"
PDF_CONTENT_TYPE = "application/pdf"


def user_invoice_prefix(user_id: str) -> str:
    return f"{INVOICE_ROOT}/users/{user_id}/"


def invoice_path(user_id: str, comercializadora_id: str, when: datetime, filename: str) -> str:
    return (
        f"{user_invoice_prefix(user_id)}comercializadoras/{comercializadora_id}/"
        f"{when.year:04d}/{when.month:02d}/{filename}"
    )


def safe_filename(filename: Optional[str]) -> str:
    name = (filename or "fatura.pdf").replace("\\", "/").split("/")[-1]
    name = re.sub(r"[^A-Za-z0-9._-]", "_", name)
    return name or "fatura.pdf"


def normalize_invoice_path(file_path: str) -> str:
    """Caminhos antigos não tinham o prefixo "invoices/"."""
    file_path = file_path.lstrip("/")
    if file_path.startswith(f"{INVOICE_ROOT}/"):
        return file_path
    return f"{INVOICE_ROOT}/{file_path}"


class InvoiceService:
    def upload(
        self,
        user_id: str,
        filename: Optional[str],
        content_type: Optional[str],
        data: bytes,
        now: Optional[datetime] = None,
    ) -> str:
        """Grava a fatura na pasta temporária do usuário e devolve o caminho lógico."""
        if not data:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nenhum arquivo enviado")
        is_pdf = content_type == PDF_CONTENT_TYPE or (filename or "").lower().endswith(".pdf")
        if not is_pdf:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Apenas arquivos PDF são permitidos")
        if len(data) > settings.INVOICE_MAX_BYTES:
            limit_mb = settings.INVOICE_MAX_BYTES // (1024 * 1024)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Arquivo muito grande. Limite: {limit_mb} MB",
            )
        if not storage.is_storage_configured():
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage não configurado")

        now = now or datetime.now(timezone.utc)
        name = f"{int(now.timestamp() * 1000)}_{safe_filename(filename)}"
        path = invoice_path(user_id, TEMP_FOLDER, now, name)
        if not storage.put_object(path, data, content_type=PDF_CONTENT_TYPE):
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Erro no upload")

        logger.info(f"Fatura enviada por {user_id}: {path} ({len(data)} bytes)")
        return path

    def reorganize(
        self,
        file_path: str,
        user_id: str,
        comercializadora_id: str,
        created_at: datetime,
    ) -> Optional[str]:
        """Move a fatura da pasta temporária para a da comercializadora. None se não moveu."""
        filename = file_path.rstrip("/").split("/")[-1]
        new_path = invoice_path(user_id, comercializadora_id, created_at, filename)
        if new_path == file_path:
            return None
        if not storage.move_object(file_path, new_path):
            logger.warning(f"Falha ao reorganizar fatura {file_path}; mantendo caminho original")
            return None
        return new_path

    def download(self, current_user: User, file_path: str) -> Tuple[bytes, str]:
        full_path = normalize_invoice_path(file_path)
        # Usuário comum só lê as próprias faturas; caminhos antigos não identificam o dono
        if current_user.role == ROLE_USER and not full_path.startswith(user_invoice_prefix(current_user.id)):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso negado")
        if not storage.is_storage_configured():
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Storage não configurado")

        data = storage.get_object(full_path)
        if data is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Arquivo não encontrado")
        return data, full_path.split("/")[-1]
