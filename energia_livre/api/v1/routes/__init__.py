from fastapi import APIRouter

from energia_livre.api.v1.routes import (
    auth,
    users,
    comercializadoras,
    purchase_intents,
    proposals,
    partner_accesses,
    affiliate,
    admin,
    invoices,
    dashboard,
)

router = APIRouter()
router.include_router(auth.router, prefix="/auth")
router.include_router(users.router, prefix="/users")
router.include_router(comercializadoras.router, prefix="/comercializadoras")
router.include_router(purchase_intents.router, prefix="/purchase-intents")
router.include_router(proposals.router, prefix="/proposals")
router.include_router(affiliate.router, prefix="/affiliate")
router.include_router(admin.router, prefix="/admin")
router.include_router(dashboard.router, prefix="/dashboard")
# Caminhos na raiz da API, iguais aos que o frontend já chama
router.include_router(partner_accesses.router)
router.include_router(invoices.router)
