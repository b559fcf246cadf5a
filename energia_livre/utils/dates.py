from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from energia_livre.core.config import settings


def local_now() -> datetime:
    """Agora no fuso configurado (TIMEZONE)."""
    return datetime.now(ZoneInfo(settings.TIMEZONE))


def to_local(value: datetime) -> datetime:
    """Datas com fuso são convertidas para TIMEZONE; datas ingênuas já são consideradas locais."""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(settings.TIMEZONE))


def to_storage(value: datetime) -> datetime:
    """
    Converte um horário local para o formato gravado no banco (UTC).
    Datas ingênuas são lidas como TIMEZONE. No SQLite o fuso é descartado,
    porque lá as colunas guardam só o relógio UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=ZoneInfo(settings.TIMEZONE))
    value = value.astimezone(timezone.utc)
    if settings.is_sqlite:
        return value.replace(tzinfo=None)
    return value


def storage_bounds(bounds: Tuple[datetime, datetime]) -> Tuple[datetime, datetime]:
    start, end = bounds
    return to_storage(start), to_storage(end)


def week_bounds(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Semana corrente começando no domingo: [domingo 00:00, próximo domingo 00:00), em horário local.
    O intervalo é semiaberto, então sábado 23:59:59.999 ainda pertence à semana.
    Para filtrar no banco, passe o resultado por storage_bounds.
    """
    current = to_local(now or local_now())
    # weekday(): segunda=0 ... domingo=6
    days_since_sunday = (current.weekday() + 1) % 7
    start = (current - timedelta(days=days_since_sunday)).replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=7)


def month_bounds(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Mês corrente em horário local: [dia 1 00:00, dia 1 do mês seguinte 00:00)."""
    current = to_local(now or local_now())
    start = current.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def as_utc(value: datetime) -> datetime:
    """Horários com fuso vão para UTC antes de gravar; ingênuos já são tratados como UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)
