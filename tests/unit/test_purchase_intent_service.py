from unittest.mock import Mock, patch

import pytest
from fastapi import HTTPException

from energia_livre.core.exceptions import ResponseAlreadyReceived
from energia_livre.models.user_partner_access import UserPartnerAccess
from energia_livre.schemas.purchase_intent import PurchaseIntentCreate
from energia_livre.services.purchase_intent_service import PurchaseIntentService

from factories import OTHER_CNPJ, VALID_CPF, make_comercializadora, make_intent, make_user


def _payload(comercializadora_id, **overrides):
    data = {
        "comercializadora_id": comercializadora_id,
        "name": "Maria Souza",
        "email": "maria@example.com",
        "phone": "11988887777",
        "document_type": "cpf",
        "document_number": "529.982.247-25",
        "bill_value": "5000-8000",
        "consumption_type": "comercial",
    }
    data.update(overrides)
    return PurchaseIntentCreate(**data)


@pytest.fixture
def setup(db):
    user = make_user(db)
    company = make_comercializadora(db, make_user(db, email="c1@example.com", role="comercializadora"))
    return user, company


def test_create_intent_registers_one_access_keyed_by_intent_id(db, setup):
    user, company = setup

    intent = PurchaseIntentService(db).create(user, _payload(company.id))

    accesses = db.query(UserPartnerAccess).all()
    assert len(accesses) == 1
    assert accesses[0].access_id == intent.id
    assert accesses[0].user_id == user.id
    assert accesses[0].comercializadora_id == company.id
    assert accesses[0].received_response is False
    assert intent.document_number == VALID_CPF
    assert intent.status == "active"


def test_create_intent_rejects_unapproved_company(db, setup):
    user, _ = setup
    pending = make_comercializadora(
        db,
        make_user(db, email="c2@example.com", role="comercializadora"),
        cnpj=OTHER_CNPJ,
        approved=False,
    )

    with pytest.raises(HTTPException) as exc:
        PurchaseIntentService(db).create(user, _payload(pending.id))
    assert exc.value.status_code == 400
    assert db.query(UserPartnerAccess).count() == 0


def test_create_intent_rejects_unapproved_affiliate(db, setup):
    user, company = setup
    pending = make_comercializadora(
        db,
        make_user(db, email="c2@example.com", role="comercializadora"),
        cnpj=OTHER_CNPJ,
        approved=False,
    )

    with pytest.raises(HTTPException) as exc:
        PurchaseIntentService(db).create(user, _payload(company.id, affiliate_comercializadora_id=pending.id))
    assert exc.value.status_code == 400


def test_create_intent_rejects_invoice_of_another_user(db, setup):
    user, company = setup
    path = "invoices/users/outro-usuario/comercializadoras/temp/2024/05/1_fatura.pdf"

    with pytest.raises(HTTPException) as exc:
        PurchaseIntentService(db).create(user, _payload(company.id, invoice_file_path=path))
    assert exc.value.status_code == 403


def test_create_intent_moves_invoice_to_company_folder(db, setup):
    user, company = setup
    temp_path = f"invoices/users/{user.id}/comercializadoras/temp/2024/05/1715590800000_fatura.pdf"

    with patch("energia_livre.services.storage.move_object", return_value=True) as move:
        intent = PurchaseIntentService(db).create(user, _payload(company.id, invoice_file_path=temp_path))

    move.assert_called_once()
    assert intent.invoice_file_path.startswith(f"invoices/users/{user.id}/comercializadoras/{company.id}/")
    assert intent.invoice_file_path.endswith("/1715590800000_fatura.pdf")


def test_create_intent_keeps_temp_path_when_move_fails(db, setup):
    user, company = setup
    temp_path = f"invoices/users/{user.id}/comercializadoras/temp/2024/05/1_fatura.pdf"

    with patch("energia_livre.services.storage.move_object", return_value=False):
        intent = PurchaseIntentService(db).create(user, _payload(company.id, invoice_file_path=temp_path))

    assert intent.invoice_file_path == temp_path


def test_invalid_cpf_is_rejected_by_schema():
    with pytest.raises(ValueError):
        _payload("qualquer", document_number="123.456.789-00")


def test_response_status_is_one_way(db, setup):
    user, company = setup
    intent = make_intent(db, user, company)
    service = PurchaseIntentService(db)

    service.set_response_received(user, intent.id, True)
    with pytest.raises(ResponseAlreadyReceived):
        service.set_response_received(user, intent.id, False)

    db.refresh(intent)
    assert intent.user_received_response is True


def test_response_status_of_someone_else_intent_is_404(db, setup):
    user, company = setup
    intent = make_intent(db, user, company)
    intruder = make_user(db, email="intruso@example.com")

    with pytest.raises(HTTPException) as exc:
        PurchaseIntentService(db).set_response_received(intruder, intent.id, True)
    assert exc.value.status_code == 404


def test_list_for_role(db, setup):
    user, company = setup
    other = make_user(db, email="outro@example.com")
    make_intent(db, user, company)
    make_intent(db, other, company)
    service = PurchaseIntentService(db)

    assert len(service.list_for(user)) == 1
    assert len(service.list_for(Mock(id="x", role="admin"))) == 2
    assert len(service.list_for(Mock(id="y", role="comercializadora"))) == 2
