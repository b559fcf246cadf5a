"""
Código de afiliado: base64 URL-safe do id da comercializadora, sem padding.
Não é criptografia, só ofusca o id no link de indicação.
"""
import base64
import binascii
import re

from energia_livre.core.config import settings
from energia_livre.core.exceptions import InvalidAffiliateCode

# Só o alfabeto URL-safe, sem padding: "+" e "/" do base64 padrão são recusados
_CODE_RE = re.compile(r"[A-Za-z0-9_-]+")


def encode_affiliate_code(comercializadora_id: str) -> str:
    raw = base64.urlsafe_b64encode(str(comercializadora_id).encode("utf-8"))
    return raw.decode("ascii").rstrip("=")


def decode_affiliate_code(code: str) -> str:
    """Inverso estrito de encode_affiliate_code; levanta InvalidAffiliateCode se malformado."""
    if not code or not _CODE_RE.fullmatch(code):
        raise InvalidAffiliateCode(code)
    padded = code + "=" * (-len(code) % 4)
    try:
        raw = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
        decoded = raw.decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError):
        raise InvalidAffiliateCode(code)
    if not decoded:
        raise InvalidAffiliateCode(code)
    return decoded


def short_affiliate_code(code: str) -> str:
    """Versão curta só para exibição; não é decodificável de volta para ids longos."""
    return code[: settings.AFFILIATE_CODE_LENGTH]
