"""
Unit tests for partner-access reconciliation (one row per user/company/access id).
Run: pytest tests/unit/test_partner_access_service.py -v
"""
from datetime import datetime
from unittest.mock import patch

import pytest
from fastapi import HTTPException

from energia_livre.core.exceptions import ResponseAlreadyReceived
from energia_livre.models.user_partner_access import UserPartnerAccess
from energia_livre.schemas.partner_access import LocalAccessItem
from energia_livre.services.partner_access_service import PartnerAccessService, strip_access_suffix

from factories import make_access, make_comercializadora, make_user


@pytest.fixture
def setup(db):
    user = make_user(db)
    owner = make_user(db, email="empresa@example.com", role="comercializadora")
    company = make_comercializadora(db, owner)
    return user, company


def _rows(db):
    return db.query(UserPartnerAccess).all()


def test_sync_access_twice_keeps_first_access_and_advances_last(db, setup):
    user, company = setup
    service = PartnerAccessService(db)
    first = datetime(2024, 5, 13, 9, 0)
    later = datetime(2024, 5, 14, 18, 30)

    service.sync_access(user.id, company.id, "sessao-1", first, first)
    service.sync_access(user.id, company.id, "sessao-1", later, later)

    rows = _rows(db)
    assert len(rows) == 1
    assert rows[0].first_access == first
    assert rows[0].last_access == later


def test_sync_access_never_clears_received_response(db, setup):
    user, company = setup
    service = PartnerAccessService(db)
    now = datetime(2024, 5, 13, 9, 0)

    service.sync_access(user.id, company.id, "sessao-1", now, now, True)
    access = service.sync_access(user.id, company.id, "sessao-1", now, now, False)

    assert access.received_response is True


def test_sync_access_different_access_ids_create_separate_rows(db, setup):
    user, company = setup
    service = PartnerAccessService(db)
    now = datetime(2024, 5, 13, 9, 0)

    service.sync_access(user.id, company.id, "sessao-1", now, now)
    service.sync_access(user.id, company.id, "sessao-2", now, now)

    assert len(_rows(db)) == 2


def test_set_response_received_true_then_false_raises_and_keeps_flag(db, setup):
    user, company = setup
    make_access(db, user, company, "sessao-1", datetime(2024, 5, 13, 9, 0))
    service = PartnerAccessService(db)

    service.set_response_received(user.id, company.id, "sessao-1", True)
    with pytest.raises(ResponseAlreadyReceived):
        service.set_response_received(user.id, company.id, "sessao-1", False)

    db.expire_all()
    assert _rows(db)[0].received_response is True


def test_set_response_received_missing_access_returns_404(db, setup):
    user, company = setup
    with pytest.raises(HTTPException) as exc:
        PartnerAccessService(db).set_response_received(user.id, company.id, "nao-existe", True)
    assert exc.value.status_code == 404


def test_register_access_reuses_open_access(db, setup):
    user, company = setup
    service = PartnerAccessService(db)
    t1 = datetime(2024, 5, 13, 9, 0)
    t2 = datetime(2024, 5, 13, 10, 0)

    first = service.register_access(user.id, company.id, now=t1)
    second = service.register_access(user.id, company.id, now=t2)

    assert first.id == second.id
    assert second.first_access == t1
    assert second.last_access == t2
    assert first.access_id.startswith(f"{company.id}_")


def test_register_access_creates_new_row_after_response(db, setup):
    user, company = setup
    service = PartnerAccessService(db)
    first = service.register_access(user.id, company.id, now=datetime(2024, 5, 13, 9, 0))
    service.set_response_received(user.id, company.id, first.access_id, True)

    second = service.register_access(user.id, company.id, now=datetime(2024, 5, 20, 9, 0))

    assert second.id != first.id
    assert len(_rows(db)) == 2


def test_register_access_unknown_company_returns_404(db, setup):
    user, _ = setup
    with pytest.raises(HTTPException) as exc:
        PartnerAccessService(db).register_access(user.id, "inexistente")
    assert exc.value.status_code == 404


def test_sync_local_accesses_strips_suffix_and_skips_invalid(db, setup):
    user, company = setup
    now = datetime(2024, 5, 13, 9, 0)
    items = [
        LocalAccessItem(id=f"{company.id}_1715590800000", first_access=now, last_access=now),
        LocalAccessItem(first_access=now, last_access=now),
        LocalAccessItem(comercializadora_id="empresa-removida", first_access=now, last_access=now),
    ]

    result = PartnerAccessService(db).sync_local_accesses(user.id, items)

    assert result["synced"] == 1
    assert result["total"] == 3
    rows = _rows(db)
    assert len(rows) == 1
    assert rows[0].comercializadora_id == company.id
    assert rows[0].access_id == f"{company.id}_1715590800000"


def test_sync_access_recovers_from_insert_race(db, setup):
    """Se outra requisição inserir a mesma chave antes, o insert vira update."""
    user, company = setup
    existing = make_access(db, user, company, "sessao-1", datetime(2024, 5, 13, 9, 0))
    service = PartnerAccessService(db)
    later = datetime(2024, 5, 13, 11, 0)

    with patch.object(service.repo, "get_by_key", side_effect=[None, existing]):
        access = service.sync_access(user.id, company.id, "sessao-1", later, later, True)

    assert access.id == existing.id
    assert access.last_access == later
    assert access.received_response is True
    assert len(_rows(db)) == 1


def test_strip_access_suffix():
    assert strip_access_suffix("abc_1715590800000") == "abc"
    assert strip_access_suffix("abc") == "abc"
