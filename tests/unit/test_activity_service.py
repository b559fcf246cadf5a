"""
Unit tests for weekly activity and solicitations tracking.
Week of 2024-05-15 (quarta): domingo 2024-05-12 00:00 até domingo 2024-05-19 00:00 (exclusivo), horário de São Paulo.
No banco os horários ficam em UTC, então a janela vira 03:00 UTC até 03:00 UTC.
"""
from datetime import datetime, timezone
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest

from energia_livre.schemas.activity import PartnerAccessActivity, PurchaseIntentActivity
from energia_livre.schemas.purchase_intent import PurchaseIntentCreate
from energia_livre.services.activity_service import ActivityService
from energia_livre.services.partner_access_service import PartnerAccessService
from energia_livre.services.purchase_intent_service import PurchaseIntentService
from energia_livre.utils.dates import month_bounds, storage_bounds, week_bounds

from factories import OTHER_CNPJ, make_access, make_comercializadora, make_intent, make_proposal, make_user

NOW = datetime(2024, 5, 15, 10, 0)


@pytest.fixture
def companies(db):
    user = make_user(db)
    c1 = make_comercializadora(db, make_user(db, email="c1@example.com", role="comercializadora"))
    c2 = make_comercializadora(
        db,
        make_user(db, email="c2@example.com", role="comercializadora"),
        cnpj=OTHER_CNPJ,
        company_name="Luz Norte",
    )
    return user, c1, c2


def test_week_bounds_starts_on_sunday():
    start, end = week_bounds(NOW)
    assert start == datetime(2024, 5, 12, 0, 0)
    assert end == datetime(2024, 5, 19, 0, 0)


def test_week_bounds_on_sunday_and_saturday():
    assert week_bounds(datetime(2024, 5, 12, 0, 0))[0] == datetime(2024, 5, 12)
    assert week_bounds(datetime(2024, 5, 18, 23, 59, 59))[0] == datetime(2024, 5, 12)


def test_week_bounds_converts_aware_datetimes_to_local_time():
    # 02:00 UTC de domingo ainda é sábado 23:00 em São Paulo
    start, _ = week_bounds(datetime(2024, 5, 12, 2, 0, tzinfo=timezone.utc))
    assert start.replace(tzinfo=None) == datetime(2024, 5, 5, 0, 0)


def test_month_bounds_rolls_over_december():
    start, end = month_bounds(datetime(2024, 12, 10))
    assert start == datetime(2024, 12, 1)
    assert end == datetime(2025, 1, 1)


def test_weekly_activity_uses_half_open_window_in_local_time(db, companies):
    # Domingo 00:00 em São Paulo = 03:00 UTC
    user, c1, _ = companies
    inside_intent = make_intent(db, user, c1, created_at=datetime(2024, 5, 12, 3, 0, tzinfo=timezone.utc))
    make_intent(db, user, c1, created_at=datetime(2024, 5, 12, 2, 59, 59, tzinfo=timezone.utc))
    make_access(db, user, c1, "dentro", last_access=datetime(2024, 5, 19, 2, 59, 59, tzinfo=timezone.utc))
    make_access(db, user, c1, "fora", last_access=datetime(2024, 5, 19, 3, 0, tzinfo=timezone.utc))

    activities = ActivityService(db).weekly_activity(NOW)

    assert len(activities) == 2
    assert isinstance(activities[0], PartnerAccessActivity)
    assert activities[0].access_id == "dentro"
    assert isinstance(activities[1], PurchaseIntentActivity)
    assert activities[1].intent_id == inside_intent.id
    assert activities[1].bill_value == "5000-8000"
    assert activities[1].details == "R$ 5000-8000"


def test_weekly_activity_accepts_aware_now(db, companies):
    user, c1, _ = companies
    make_intent(db, user, c1, created_at=datetime(2024, 5, 12, 3, 0, tzinfo=timezone.utc))

    activities = ActivityService(db).weekly_activity(datetime(2024, 5, 15, 13, 0, tzinfo=timezone.utc))

    assert len(activities) == 1


def test_intent_created_on_monday_shows_in_company_week(db, companies):
    user, c1, c2 = companies
    monday_noon_utc = datetime(2024, 5, 13, 15, 0, tzinfo=timezone.utc)
    payload = PurchaseIntentCreate(
        comercializadora_id=c1.id,
        name="Maria Souza",
        email="maria@example.com",
        phone="11988887777",
        document_type="cpf",
        document_number="52998224725",
        bill_value="5000-8000",
        consumption_type="comercial",
    )
    with patch("energia_livre.services.purchase_intent_service.datetime") as fake_datetime:
        fake_datetime.now.return_value = monday_noon_utc
        intent = PurchaseIntentService(db).create(user, payload)

    activities = ActivityService(db).weekly_activity(NOW, comercializadora_id=c1.id)

    intent_items = [a for a in activities if isinstance(a, PurchaseIntentActivity)]
    assert [a.intent_id for a in intent_items] == [intent.id]
    assert intent_items[0].bill_value == "5000-8000"
    assert [a.access_id for a in activities if isinstance(a, PartnerAccessActivity)] == [intent.id]
    assert ActivityService(db).weekly_activity(NOW, comercializadora_id=c2.id) == []


def test_access_late_on_saturday_stays_in_the_week(db, companies):
    # Sábado 22:30 em São Paulo já é domingo 01:30 UTC
    user, c1, _ = companies
    saturday_night = datetime(2024, 5, 18, 22, 30, tzinfo=ZoneInfo("America/Sao_Paulo"))
    PartnerAccessService(db).register_access(user.id, c1.id, now=saturday_night)

    activities = ActivityService(db).weekly_activity(datetime(2024, 5, 15, 10, 0, tzinfo=ZoneInfo("America/Sao_Paulo")))

    assert len(activities) == 1
    assert activities[0].access_id.startswith(f"{c1.id}_")


def test_storage_bounds_are_utc_on_sqlite():
    start, end = storage_bounds(week_bounds(NOW))
    assert start == datetime(2024, 5, 12, 3, 0)
    assert end == datetime(2024, 5, 19, 3, 0)
    assert start.tzinfo is None


def test_weekly_activity_filters_by_company(db, companies):
    user, c1, c2 = companies
    make_intent(db, user, c1, created_at=datetime(2024, 5, 13, 9, 0))
    make_intent(db, user, c2, created_at=datetime(2024, 5, 14, 9, 0))

    activities = ActivityService(db).weekly_activity(NOW, comercializadora_id=c1.id)

    assert [a.comercializadora_id for a in activities] == [c1.id]
    assert activities[0].comercializadora_name == "Energia Sul"


def test_weekly_activity_is_sorted_descending(db, companies):
    user, c1, c2 = companies
    make_intent(db, user, c1, created_at=datetime(2024, 5, 13, 9, 0))
    make_access(db, user, c2, "a1", last_access=datetime(2024, 5, 16, 9, 0))
    make_intent(db, user, c2, created_at=datetime(2024, 5, 14, 9, 0))

    occurred = [a.occurred_at for a in ActivityService(db).weekly_activity(NOW)]

    assert occurred == sorted(occurred, reverse=True)


def test_solicitations_tracking_counts_proposals_and_merges_accesses(db, companies):
    user, c1, _ = companies
    intent = make_intent(db, user, c1, created_at=datetime(2024, 5, 13, 9, 0))
    make_proposal(db, intent, c1)
    make_proposal(db, intent, c1)
    make_access(
        db,
        user,
        c1,
        "sessao-1",
        first_access=datetime(2024, 5, 10, 8, 0),
        last_access=datetime(2024, 5, 14, 8, 0),
    )

    items = ActivityService(db).solicitations_tracking()

    assert [item.type for item in items] == ["partner_access", "purchase_intent"]
    access_item, intent_item = items
    assert intent_item.proposal_count == 2
    assert intent_item.comercializadora.company_name == "Energia Sul"
    assert access_item.user_email == user.email
    assert access_item.access_data.local_access_id == "sessao-1"
    assert access_item.access_data.first_access == datetime(2024, 5, 10, 8, 0)


def test_affiliate_tracking_lists_only_referred_intents(db, companies):
    user, c1, c2 = companies
    referred = make_intent(db, user, c1, affiliate=c2)
    make_intent(db, user, c1)
    make_proposal(db, referred, c1)

    items = ActivityService(db).affiliate_tracking()

    assert len(items) == 1
    assert items[0].intent_id == referred.id
    assert items[0].affiliate_comercializadora_id == c2.id
    assert items[0].target_comercializadora == "Energia Sul"
    assert items[0].proposal_count == 1
