"""
Validação e formatação de CPF/CNPJ.
Documentos são guardados apenas com dígitos; a formatação é só para exibição.
"""
import re
from typing import Optional

CPF_LENGTH = 11
CNPJ_LENGTH = 14

_CNPJ_WEIGHTS_1 = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
_CNPJ_WEIGHTS_2 = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]


def only_digits(value: Optional[str]) -> str:
    if not value:
        return ""
    return "".join(ch for ch in str(value) if ch.isdigit())


def _all_same(digits: str) -> bool:
    return len(set(digits)) == 1


def validate_cpf(cpf: str) -> bool:
    digits = only_digits(cpf)
    if len(digits) != CPF_LENGTH or _all_same(digits):
        return False

    numbers = [int(d) for d in digits]
    for position in (9, 10):
        total = sum(numbers[i] * (position + 1 - i) for i in range(position))
        remainder = 11 - (total % 11)
        check = 0 if remainder >= 10 else remainder
        if check != numbers[position]:
            return False
    return True


def validate_cnpj(cnpj: str) -> bool:
    digits = only_digits(cnpj)
    if len(digits) != CNPJ_LENGTH or _all_same(digits):
        return False

    numbers = [int(d) for d in digits]
    for position, weights in ((12, _CNPJ_WEIGHTS_1), (13, _CNPJ_WEIGHTS_2)):
        total = sum(numbers[i] * weights[i] for i in range(position))
        remainder = total % 11
        check = 0 if remainder < 2 else 11 - remainder
        if check != numbers[position]:
            return False
    return True


def validate_document(document: str, document_type: str) -> bool:
    """Valida o documento conforme o tipo ("cpf" ou "cnpj")."""
    if document_type == "cnpj":
        return validate_cnpj(document)
    if document_type == "cpf":
        return validate_cpf(document)
    return False


def format_cpf(cpf: str) -> str:
    return re.sub(r"(\d{3})(\d{3})(\d{3})(\d{2})", r"\1.\2.\3-\4", only_digits(cpf))


def format_cnpj(cnpj: str) -> str:
    return re.sub(r"(\d{2})(\d{3})(\d{3})(\d{4})(\d{2})", r"\1.\2.\3/\4-\5", only_digits(cnpj))
