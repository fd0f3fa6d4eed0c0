import asyncio

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from staff_roster.exceptions import ExternalServiceError, ValidationError
from staff_roster.services import parsing_service
from staff_roster.services.parsing_service import parse_bulk_employee_data


def _parse(text, response):
    llm = FakeListChatModel(responses=[response])
    return asyncio.run(parse_bulk_employee_data(text, llm=llm))


def test_parses_json_array():
    parsed = _parse(
        "10234 John Doe, Driver, Permanent, 9847012345",
        '[{"name": "John Doe", "designation": "Driver", "type": "Permanent", '
        '"phone": "9847012345", "email": null, "pen": "10234"}]',
    )

    assert len(parsed) == 1
    assert parsed[0].name == "John Doe"
    assert parsed[0].pen == "10234"
    assert parsed[0].email is None


def test_parses_fenced_json_and_numeric_pen():
    parsed = _parse("Jane", '```json\n[{"name": "Jane Smith", "type": "Badali", "pen": 10567}]\n```')

    assert parsed[0].type == "Badali"
    assert parsed[0].pen == "10567"


def test_drops_items_without_name():
    parsed = _parse("x", '[{"name": "", "type": "Permanent"}, {"type": "Badali"}, {"name": "Asha", "type": "Badali"}]')

    assert [p.name for p in parsed] == ["Asha"]


def test_non_list_response_is_external_failure():
    with pytest.raises(ExternalServiceError, match="Failed to parse"):
        _parse("x", '{"name": "Asha"}')


def test_empty_text_is_validation_error():
    with pytest.raises(ValidationError):
        _parse("   ", "[]")


def test_missing_api_key_fails_before_request(monkeypatch):
    monkeypatch.setattr(parsing_service, "AZURE_OPENAI_API_KEY", None)

    with pytest.raises(ExternalServiceError, match="API Key"):
        asyncio.run(parse_bulk_employee_data("John Doe, Driver"))
