"""
Unit Tests for Note Request Parsing.

Tests how write endpoints interpret the raw request body.
"""

import pytest

from modules.backend.api.v1.endpoints.notes import _is_blank, _parse_payload
from modules.backend.core.exceptions import MissingParameterError, ValidationError
from modules.backend.schemas.note import NoteCreateRequest, NoteUpdateRequest


class TestIsBlank:
    """Tests for required-parameter blankness."""

    @pytest.mark.parametrize("value", [None, False, "", "  \n", {}, []])
    def test_blank_values(self, value):
        assert _is_blank(value) is True

    @pytest.mark.parametrize("value", [{"foo": 1}, {"title": ""}, "x", ["x"], 0, True])
    def test_present_values(self, value):
        assert _is_blank(value) is False


class TestParsePayload:
    """Tests for _parse_payload."""

    @pytest.mark.parametrize(
        "payload",
        [None, [], "note", {}, {"title": "Top level"}, {"note": None}, {"note": {}}],
    )
    def test_missing_or_blank_note_raises(self, payload):
        with pytest.raises(MissingParameterError):
            _parse_payload(NoteCreateRequest, payload)

    def test_returns_validated_request(self):
        data = _parse_payload(NoteUpdateRequest, {"note": {"body": "Text"}, "other": 1})

        assert isinstance(data, NoteUpdateRequest)
        assert data.note.model_dump(exclude_unset=True) == {"body": "Text"}

    def test_unknown_keys_only_still_count_as_present(self):
        data = _parse_payload(NoteCreateRequest, {"note": {"color": "red"}})

        assert data.note.model_dump(exclude_unset=True) == {}

    def test_type_errors_are_grouped_by_field(self):
        with pytest.raises(ValidationError) as exc_info:
            _parse_payload(NoteCreateRequest, {"note": {"title": 123, "archived": "maybe"}})

        assert set(exc_info.value.details) == {"title", "archived"}
