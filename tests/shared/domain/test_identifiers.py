"""Tests for identifier format checks."""

from uuid import uuid4

import pytest
from protean.exceptions import ValidationError
from storefront.shared.identifiers import ensure_identifier, is_valid_identifier


class TestIsValidIdentifier:
    def test_uuid_string_is_valid(self):
        assert is_valid_identifier(str(uuid4()))

    @pytest.mark.parametrize("value", [None, "", "abc", "12345", "not-a-uuid-at-all"])
    def test_other_values_are_invalid(self, value):
        assert not is_valid_identifier(value)


class TestEnsureIdentifier:
    def test_returns_canonical_form(self):
        value = uuid4()
        assert ensure_identifier(str(value).upper(), "product") == str(value)

    def test_error_is_keyed_on_label(self):
        with pytest.raises(ValidationError) as exc:
            ensure_identifier("abc", "product")
        assert exc.value.messages == {"product_id": ["Invalid product ID"]}
