"""Tests for catalog request models."""

import pytest
from pydantic import ValidationError

from modules.catalog.models import CreateProductRequest, UpdateProductRequest


class TestProductName:
    def test_create_strips_name(self):
        request = CreateProductRequest(name="  Course  ", price="10.00")
        assert request.name == "Course"

    @pytest.mark.parametrize("name", ["   ", "Course\r\nSet-Cookie: x=1", "Tab\tname", "Bell\x07", "Del\x7f"])
    def test_create_rejects_bad_names(self, name):
        with pytest.raises(ValidationError):
            CreateProductRequest(name=name, price="10.00")

    def test_update_rejects_control_characters(self):
        with pytest.raises(ValidationError):
            UpdateProductRequest(name="Course\nSet-Cookie: x=1")

    def test_update_without_name(self):
        request = UpdateProductRequest(price="5.00")
        assert request.name is None
        assert "name" not in request.model_fields_set

    def test_non_ascii_name_is_allowed(self):
        assert CreateProductRequest(name="Café", price="1.00").name == "Café"
