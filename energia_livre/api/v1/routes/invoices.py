from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

from energia_livre.api.v1.dependencies import get_current_user
from energia_livre.models.user import User
from energia_livre.services.invoice_service import PDF_CONTENT_TYPE, InvoiceService

router = APIRouter(tags=["invoices"])


class InvoiceUploadResponse(BaseModel):
    message: str
    file_path: str


@router.post("/upload-invoice", response_model=InvoiceUploadResponse)
async def upload_invoice(
    invoice: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
):
    # Fatura é lida inteira em memória; o limite de tamanho é checado no serviço
    data = await invoice.read()
    path = InvoiceService().upload(current_user.id, invoice.filename, invoice.content_type, data)
    return InvoiceUploadResponse(message="Arquivo enviado com sucesso", file_path=path)


@router.get("/invoices/{file_path:path}")
def download_invoice(
    file_path: str,
    current_user: User = Depends(get_current_user),
):
    data, filename = InvoiceService().download(current_user, file_path)
    return Response(
        content=data,
        media_type=PDF_CONTENT_TYPE,
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )
