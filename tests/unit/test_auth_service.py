from unittest.mock import patch

import pytest
from fastapi import HTTPException

from energia_livre.repositories.user_repository import UserRepository
from energia_livre.schemas.user import UserCreate
from energia_livre.services.auth_service import AuthService

from factories import make_user


def test_register_invalidates_admin_stats_cache(db):
    data = UserCreate(name="Ana", email="ana@example.com", password="secret123")

    with patch("energia_livre.services.auth_service.invalidate_marketplace_cache") as invalidate:
        result = AuthService(UserRepository(db)).register(data)

    invalidate.assert_called_once_with()
    assert result["user"].email == "ana@example.com"


def test_register_duplicate_email_keeps_cache(db):
    make_user(db, email="ana@example.com")
    data = UserCreate(name="Ana", email="ana@example.com", password="secret123")

    with patch("energia_livre.services.auth_service.invalidate_marketplace_cache") as invalidate:
        with pytest.raises(HTTPException) as exc:
            AuthService(UserRepository(db)).register(data)

    assert exc.value.status_code == 400
    invalidate.assert_not_called()
