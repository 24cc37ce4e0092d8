"""Tests for the infrastructure.db module."""

from finance_tracker.infrastructure import db as db_module


def test_get_db_url_reads_environment(monkeypatch):
    """_get_db_url should load .env and return FINANCE_DB_URL."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("FINANCE_DB_URL", "postgresql://example")

    assert db_module._get_db_url() == "postgresql://example"


def test_get_db_url_defaults_to_sqlite_file(monkeypatch, tmp_path):
    """Without FINANCE_DB_URL a SQLite file under data/ is used."""
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(db_module, "get_project_root", lambda: tmp_path)
    monkeypatch.delenv("FINANCE_DB_URL", raising=False)

    url = db_module._get_db_url()

    assert url == f"sqlite:///{tmp_path / 'data' / 'finance.db'}"


def test_create_engine_enables_health_checks(monkeypatch):
    """_create_engine should enable pre-ping and the 2.0 API."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("sqlite:///finance.db")

    assert engine == "engine"
    assert captured["db_url"] == "sqlite:///finance.db"
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True


def test_get_finance_engine_caches_engine(monkeypatch):
    """get_finance_engine should memoize the created engine."""
    monkeypatch.setattr(db_module, "_finance_engine", None)
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(db_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setenv("FINANCE_DB_URL", "postgresql://finance")

    engine_one = db_module.get_finance_engine()
    engine_two = db_module.get_finance_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:postgresql://finance"
    assert created == ["postgresql://finance"]


def test_adapter_without_url_proxies_global_engine(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should proxy the global helper."""
    monkeypatch.setattr(db_module, "get_finance_engine", lambda: "global")

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter()

    assert adapter.get_engine() == "global"


def test_adapter_with_url_owns_engine(monkeypatch):
    """An explicit URL creates one private engine per adapter."""
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter("sqlite:///a.db")

    assert adapter.get_engine() is adapter.get_engine()
    assert created == ["sqlite:///a.db"]
