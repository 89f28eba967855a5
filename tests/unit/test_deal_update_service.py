"""
Unit tests for DealUpdateService.

Run: pytest tests/unit/test_deal_update_service.py -v
"""

import pytest

from services.deal_update_service import DealUpdateService
from exceptions import HubSpotError
from tests.conftest import FakeHubSpotClient


class TestUpdateProperties:
    """Tests for DealUpdateService.update_properties()"""

    def test_writes_all_properties_in_one_call(self, fake_crm):
        service = DealUpdateService(fake_crm)

        result = service.update_properties("deal-1", {"a": "x", "b": "y"})

        assert result.success is True
        assert result.updated == ["a", "b"]
        assert fake_crm.updates == [("deal-1", {"a": "x", "b": "y"})]

    def test_boolean_labels_converted(self, fake_crm):
        service = DealUpdateService(fake_crm)

        service.update_properties("deal-1", {"assinado": "Sim", "entregue": "Não", "nota": None})

        assert fake_crm.updates[0][1] == {"assinado": "true", "entregue": "false", "nota": ""}

    def test_empty_properties_written_as_noop(self, fake_crm):
        service = DealUpdateService(fake_crm)

        result = service.update_properties("deal-1", {})

        assert result.success is True
        assert result.updated == []
        assert fake_crm.updates == [("deal-1", {})]

    def test_write_failure_propagates(self, fake_crm):
        fake_crm.update_error = HubSpotError("HubSpot PATCH failed", status=400)
        service = DealUpdateService(fake_crm)

        with pytest.raises(HubSpotError) as exc_info:
            service.update_properties("deal-1", {"a": "x"})

        assert exc_info.value.http_status == 400
