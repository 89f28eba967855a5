"""
Shared test fixtures.

Fakes stand in for the two external systems: the HubSpot CRM and the
remote requirements file.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import json
import time
import pytest
import requests
from typing import Any, Optional

from models.line_item import LineItem
from services.requirement_catalog_service import RequirementCatalog

REQUIREMENTS_URL = "https://example.test/requisitos.json"


# ===================
# MOCK HTTP
# ===================

class FakeResponse:
    """Minimal requests.Response stand-in."""

    def __init__(self, json_data: Any = None, status_code: int = 200, text: Optional[str] = None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(json_data) if json_data is not None else ""
        self.text = text
        self.content = text.encode("utf-8")

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(
                f"{self.status_code} Client Error",
                response=self
            )


class FakeSession:
    """Records requests and replays queued responses in order."""

    def __init__(self, responses: Optional[list] = None, error: Optional[Exception] = None):
        self.responses = list(responses or [])
        self.error = error
        self.calls: list[dict] = []

    def request(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)

    def get(self, url: str, **kwargs) -> FakeResponse:
        return self.request("GET", url, **kwargs)


# ===================
# MOCK HUBSPOT
# ===================

class FakeHubSpotClient:
    """
    In-memory HubSpot client.

    Usage:
        crm = FakeHubSpotClient(
            line_items=[LineItem(id="1", sku_code="123")],
            values={"prop_a": "x"},
            metadata={"prop_a": {"type": "string", "label": "Prop A"}},
        )
        crm.metadata["prop_b"] = RuntimeError("boom")   # lookup fails
        crm.metadata_delays["prop_c"] = 1.0              # lookup is slow
    """

    def __init__(
        self,
        line_items: Optional[list[LineItem]] = None,
        values: Optional[dict] = None,
        metadata: Optional[dict] = None
    ):
        self.line_items = line_items or []
        self.values = values or {}
        self.metadata = metadata or {}
        self.metadata_delays: dict[str, float] = {}
        self.line_items_error: Optional[Exception] = None
        self.values_error: Optional[Exception] = None
        self.update_error: Optional[Exception] = None
        self.value_requests: list[tuple[str, list[str]]] = []
        self.metadata_requests: list[str] = []
        self.updates: list[tuple[str, dict]] = []

    def get_deal_line_items(self, deal_id: str) -> list[LineItem]:
        if self.line_items_error is not None:
            raise self.line_items_error
        return list(self.line_items)

    def get_deal_properties(self, deal_id: str, names: list[str]) -> dict:
        self.value_requests.append((deal_id, list(names)))
        if self.values_error is not None:
            raise self.values_error
        return {name: self.values.get(name) for name in names}

    def get_property_metadata(self, name: str, object_type: str = "deals") -> dict:
        self.metadata_requests.append(name)
        if name in self.metadata_delays:
            time.sleep(self.metadata_delays[name])
        result = self.metadata.get(name)
        if isinstance(result, Exception):
            raise result
        if result is None:
            raise KeyError(name)
        return result

    def update_deal_properties(self, deal_id: str, properties: dict) -> dict:
        if self.update_error is not None:
            raise self.update_error
        self.updates.append((deal_id, dict(properties)))
        return {"id": deal_id, "properties": properties}


# ===================
# FIXTURES
# ===================

@pytest.fixture
def fake_crm() -> FakeHubSpotClient:
    """Empty fake CRM; configure attributes per test."""
    return FakeHubSpotClient()


@pytest.fixture
def catalog_json() -> list:
    """Requirements file as published: an array of arrays."""
    return [
        [
            {"sku": "DOCU-GRAL-123", "propsDeal": ["contrato_assinado", "data_entrega"]},
            {"sku": "SERV-45", "propsDeal": ["escopo_servico"]},
        ],
        [
            {"sku": "789", "propsDeal": ["data_entrega", "responsavel"]},
        ],
    ]


def make_catalog(body: Any = None, status_code: int = 200, text: Optional[str] = None,
                 error: Optional[Exception] = None) -> RequirementCatalog:
    """RequirementCatalog whose download returns the given body."""
    session = FakeSession([FakeResponse(body, status_code=status_code, text=text)], error=error)
    return RequirementCatalog(url=REQUIREMENTS_URL, timeout=1, session=session)


@pytest.fixture
def catalog_factory():
    """Build RequirementCatalog instances over canned responses."""
    return make_catalog


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client with dependency overrides cleared afterwards.
    
    Usage:
        def test_endpoint(test_client):
            app.dependency_overrides[get_service] = lambda: service
            response = test_client.post("/api/deal-requirements", json={...})
    """
    from fastapi.testclient import TestClient
    from main import app
    
    yield TestClient(app)
    app.dependency_overrides.clear()
