import pytest
from elastic_transport import ApiResponseMeta, HttpHeaders, NodeConfig
from elasticsearch import NotFoundError

from savedobjects.config import get_settings


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Don't let a local .env file or environment variables change the settings in tests"""
    monkeypatch.setenv("SAVEDOBJECTS_ENV_FILE", str(tmp_path / "missing.env"))
    for name in ["PERMISSION_ENABLED", "WORKSPACE_ENABLED", "INDEX", "ELASTIC_HOST", "ELASTIC_PASSWORD"]:
        monkeypatch.delenv(f"SAVEDOBJECTS_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def all_flags(name: str) -> bool:
    return True


def not_found(index: str) -> NotFoundError:
    meta = ApiResponseMeta(
        status=404, http_version="1.1", headers=HttpHeaders(), duration=0.0, node=NodeConfig("http", "localhost", 9200)
    )
    return NotFoundError(f"no such index [{index}]", meta=meta, body={"status": 404})


class FakeIndices:
    def __init__(self, mappings: dict):
        self.mappings = mappings
        self.requested: list[str] = []

    async def get_mapping(self, index: str):
        self.requested.append(index)
        if index not in self.mappings:
            raise not_found(index)
        return {index: {"mappings": self.mappings[index]}}


class FakeElastic:
    """Just enough of AsyncElasticsearch to read mappings"""

    def __init__(self, mappings: dict | None = None):
        self.indices = FakeIndices(mappings or {})
