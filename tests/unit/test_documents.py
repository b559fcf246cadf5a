from energia_livre.utils.documents import (
    format_cnpj,
    format_cpf,
    only_digits,
    validate_cnpj,
    validate_cpf,
    validate_document,
)


def test_validate_cpf():
    assert validate_cpf("529.982.247-25") is True
    assert validate_cpf("52998224725") is True
    assert validate_cpf("52998224724") is False
    assert validate_cpf("111.111.111-11") is False
    assert validate_cpf("123") is False


def test_validate_cnpj():
    assert validate_cnpj("11.222.333/0001-81") is True
    assert validate_cnpj("11444777000161") is True
    assert validate_cnpj("11222333000182") is False
    assert validate_cnpj("00000000000000") is False


def test_validate_document_dispatches_by_type():
    assert validate_document("52998224725", "cpf") is True
    assert validate_document("52998224725", "cnpj") is False
    assert validate_document("11222333000181", "rg") is False


def test_formatting():
    assert only_digits("11.222.333/0001-81") == "11222333000181"
    assert format_cpf("52998224725") == "529.982.247-25"
    assert format_cnpj("11222333000181") == "11.222.333/0001-81"
