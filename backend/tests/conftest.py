import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from pathtrace.core.graph.graph_loader import build_sample_graph, seed_sample_graph
from pathtrace.db.database import init_db, make_session_factory
from pathtrace.main import app
from pathtrace.routers.graph import get_session_factory

# -----------------------------
# Graph fixtures
# -----------------------------

@pytest.fixture
def sample_graph():
    """The seven-node A..G network."""
    return build_sample_graph()


@pytest.fixture
def disconnected_graph():
    """Sample network plus an isolated node H."""
    graph = build_sample_graph()
    graph.add_node("H", 520, 200)
    return graph

# -----------------------------
# Database fixtures (in-memory SQLite shared across threads)
# -----------------------------

@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return make_session_factory(db_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded_db(db):
    seed_sample_graph(db)
    return db


@pytest.fixture
def client(session_factory):
    session = session_factory()
    try:
        seed_sample_graph(session)
    finally:
        session.close()

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()
