"""
Unit tests for text utilities.

Run: pytest tests/unit/test_text_utils.py -v
"""

import pytest

from utils.text_utils import clean_sku, normalize_property_value


class TestCleanSku:

    @pytest.mark.parametrize("code", [None, "", "  ", "\t"])
    def test_empty_codes(self, code):
        assert clean_sku(code) is None

    def test_code_kept_verbatim(self):
        assert clean_sku("DOCU-GRAL-123") == "DOCU-GRAL-123"


class TestNormalizePropertyValue:

    @pytest.mark.parametrize("value,expected", [
        ("Sim", "true"),
        ("Não", "false"),
        ("NAO", "NAO"),
        ("nao", "nao"),
        ("sim", "sim"),
        (" Sim ", " Sim "),
        (True, "true"),
        (False, "false"),
        (None, ""),
        (42, "42"),
        (1.5, "1.5"),
        ("texto livre", "texto livre"),
        ("", ""),
    ])
    def test_values(self, value, expected):
        assert normalize_property_value(value) == expected
