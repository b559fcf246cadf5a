"""
Fixtures compartilhadas: banco SQLite em memória e TestClient.
As variáveis de ambiente precisam existir antes de importar energia_livre (Settings é instanciado no import).
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ENVIRONMENT"] = "test"
for _var in ("REDIS_URL", "S3_BUCKET", "S3_ENDPOINT", "S3_ACCESS_KEY", "S3_SECRET_KEY", "DATABASE_SCHEMA"):
    os.environ.pop(_var, None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from energia_livre.db.base import Base
from energia_livre.db.session import enable_sqlite_savepoints, get_db
from energia_livre.main import app
import energia_livre.models  # noqa: F401  registra as tabelas no Base.metadata

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_savepoints(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    # Sem "with": o evento de startup (init_db no banco real) não roda
    yield TestClient(app)
    app.dependency_overrides.clear()
