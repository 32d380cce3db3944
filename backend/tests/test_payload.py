"""
Programmers Backend — Payload Normalization & Error Message Tests
===================================================================

What:  JSON vs form bodies normalize to the same dict; pydantic errors turn
       into the field → messages map the Angular form displays.
"""

import pydantic
import pytest

from app.schemas.programmer import ProgrammerCreate, ProgrammerPatch, collect_field_errors
from app.services.payload import normalize_payload


class TestNormalizePayload:

    def test_flat_keys_pass_through(self):
        assert normalize_payload({"name": "Ada", "experience": 3}) == {
            "name": "Ada",
            "experience": 3,
        }

    def test_model_scoped_form_keys(self):
        data = {"Programmer[name]": "Ada", "Programmer[experience]": "3"}
        assert normalize_payload(data) == {"name": "Ada", "experience": "3"}

    def test_model_wrapped_json(self):
        data = {"Programmer": {"name": "Ada", "password": "secret1"}}
        assert normalize_payload(data) == {"name": "Ada", "password": "secret1"}

    def test_blank_and_null_dropped(self):
        data = {"name": "   ", "experience": None, "password": ""}
        assert normalize_payload(data) == {}

    def test_strings_trimmed_except_password(self):
        data = {"name": "  Ada  ", "password": " spaced secret "}
        assert normalize_payload(data) == {"name": "Ada", "password": " spaced secret "}

    def test_other_model_scope_left_alone(self):
        data = {"Other[name]": "Ada"}
        assert normalize_payload(data) == {"Other[name]": "Ada"}


class TestCollectFieldErrors:

    def _errors(self, model, data):
        with pytest.raises(pydantic.ValidationError) as exc_info:
            model.model_validate(data)
        return collect_field_errors(exc_info.value)

    def test_missing(self):
        errors = self._errors(ProgrammerCreate, {"experience": 1, "password": "secret1"})
        assert errors == {"name": ["Name cannot be blank."]}

    def test_max_and_min_length(self):
        errors = self._errors(
            ProgrammerCreate, {"name": "n" * 200, "experience": 1, "password": "short"}
        )
        assert errors == {
            "name": ["Name is too long (maximum is 128 characters)."],
            "password": ["Password is too short (minimum is 6 characters)."],
        }

    def test_numeric_format(self):
        errors = self._errors(ProgrammerPatch, {"experience": "3 years"})
        assert errors == {"experience": ["Experience must be a number."]}

    def test_infinity_is_not_a_number(self):
        errors = self._errors(ProgrammerPatch, {"experience": "inf"})
        assert errors == {"experience": ["Experience must be a number."]}

    def test_booleans_are_not_numbers(self):
        for model in (ProgrammerCreate, ProgrammerPatch):
            errors = self._errors(
                model, {"name": "Ada", "experience": False, "password": "secret1"}
            )
            assert errors == {"experience": ["Experience must be a number."]}

    def test_numeric_strings_accepted(self):
        assert ProgrammerCreate.model_validate(
            {"name": "Ada", "experience": "2.5", "password": "secret1"}
        ).experience == 2.5
