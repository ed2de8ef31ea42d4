import pytest
from fastapi.testclient import TestClient

from wegrow_node.config import default_config
from wegrow_node.wegrow_api import create_app
from wegrow_node.wegrow_runtime.atomic_store import AtomicDocumentStore
from wegrow_node.wegrow_runtime.economy import Economy
from wegrow_node.wegrow_runtime.marketplace import Marketplace


@pytest.fixture
def store(tmp_path):
    """Fresh seeded store per test, isolated under tmp_path"""
    return AtomicDocumentStore(tmp_path / "db.json", lock_timeout_sec=30)


@pytest.fixture
def economy(store):
    return Economy(store)


@pytest.fixture
def market(store, economy):
    return Marketplace(store, economy)


@pytest.fixture
def user(market):
    return market.signup("a@x.com", name="Ada", location="Riverside")["user"]


@pytest.fixture
def client(store):
    cfg = default_config()
    cfg["storage"]["path"] = str(store.path)
    return TestClient(create_app(cfg, store=store))
