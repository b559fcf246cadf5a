from unittest.mock import patch

from energia_livre.models.comercializadora import Comercializadora
from energia_livre.models.user import User
from energia_livre.schemas.admin import DataImport
from energia_livre.services.admin_service import AdminService

from factories import OTHER_CNPJ, VALID_CNPJ, make_comercializadora, make_intent, make_proposal, make_user


def _company_row(company_id, user_id, cnpj, name):
    return {
        "id": company_id,
        "user_id": user_id,
        "company_name": name,
        "cnpj": cnpj,
        "email": "contato@example.com",
        "phone": "1133334444",
        "address": "Av. Paulista, 1000",
        "aneel_registration": "ANEEL-9",
        "service_areas": "SP",
        "is_approved": True,
    }


def test_stats_counts_only_approved_companies(db):
    make_comercializadora(db, make_user(db, email="c1@example.com", role="comercializadora"))
    make_comercializadora(
        db,
        make_user(db, email="c2@example.com", role="comercializadora"),
        cnpj=OTHER_CNPJ,
        approved=False,
    )

    stats = AdminService(db).stats()

    assert stats == {"total_users": 2, "total_comercializadoras": 1, "total_proposals": 0}


def test_stats_uses_cache_when_available(db):
    cached = {"total_users": 9, "total_comercializadoras": 9, "total_proposals": 9}
    with patch("energia_livre.services.admin_service.cache_get", return_value=cached):
        assert AdminService(db).stats() == cached


def test_export_contains_every_table(db):
    user = make_user(db)
    company = make_comercializadora(db, make_user(db, email="c1@example.com", role="comercializadora"))
    intent = make_intent(db, user, company)
    make_proposal(db, intent, company)

    dump = AdminService(db).export_data()

    assert dump["stats"] == {
        "total_users": 2,
        "total_comercializadoras": 1,
        "total_purchase_intents": 1,
        "total_proposals": 1,
    }
    assert dump["purchase_intents"][0].id == intent.id


def test_import_upserts_and_reports_row_errors(db):
    existing = make_user(db, email="antigo@example.com", name="Nome Antigo")
    data = DataImport.model_validate({
        "users": [
            {"id": existing.id, "email": "antigo@example.com", "name": "Nome Novo", "role": "user"},
            {"id": "u-novo", "email": "novo@example.com", "name": "Novo", "role": "comercializadora"},
            {"id": "u-outro", "email": "outro@example.com", "name": "Outro", "role": "comercializadora"},
        ],
        "comercializadoras": [
            _company_row("c-1", "u-novo", VALID_CNPJ, "Energia Sul"),
            # mesmo CNPJ: viola a constraint única e deve virar erro sem abortar o lote
            _company_row("c-2", "u-outro", VALID_CNPJ, "Duplicada"),
        ],
    })

    result = AdminService(db).import_data(data)

    assert result["success"] is True
    assert result["imported"] == {"users": 3, "comercializadoras": 1, "purchase_intents": 0, "proposals": 0}
    assert len(result["errors"]) == 1
    assert "Duplicada" in result["errors"][0]

    db.expire_all()
    assert db.query(User).filter(User.id == existing.id).one().name == "Nome Novo"
    assert db.query(Comercializadora).count() == 1


def test_database_info_counts_rows(db):
    make_user(db)
    info = AdminService(db).database_info()
    assert info["database"] == "sqlite"
    assert info["tables"]["users"] == 1
    assert info["tables"]["user_partner_accesses"] == 0
