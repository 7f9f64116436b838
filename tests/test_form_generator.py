import json
from types import SimpleNamespace

import pytest

from cotrac_onboarding.catalog import SERVICES
from cotrac_onboarding.form_generator import generate_dynamic_form
from cotrac_onboarding.form_generator.lm import make_dspy_lm_config
from cotrac_onboarding.form_generator.prompts import build_field_brief, is_fuel_plan
from cotrac_onboarding.form_generator.validation import parse_form_fields


def _clear_lm_env(monkeypatch):
    for name in ("DSPY_PROVIDER", "DSPY_MODEL", "GEMINI_API_KEY", "API_KEY", "OPENAI_API_KEY", "GROQ_API_KEY"):
        monkeypatch.delenv(name, raising=False)


def _program(output):
    calls = []

    def run(**kwargs):
        calls.append(kwargs)
        if isinstance(output, Exception):
            raise output
        return SimpleNamespace(form_fields_json=output)

    run.calls = calls
    return run


def _assert_fallback(fields):
    assert [f.id for f in fields] == ["full_name", "phone_no", "license_plate"]
    assert [f.type for f in fields] == ["text", "tel", "text"]
    assert all(f.required for f in fields)


@pytest.mark.parametrize("service", SERVICES, ids=lambda s: s.id)
def test_unconfigured_lm_yields_fallback_for_every_plan(monkeypatch, service):
    _clear_lm_env(monkeypatch)
    _assert_fallback(generate_dynamic_form(service.name))


def test_program_error_yields_fallback():
    _assert_fallback(generate_dynamic_form("COTRAC GOLD", program=_program(TimeoutError("unreachable"))))


def test_malformed_json_yields_fallback():
    _assert_fallback(generate_dynamic_form("COTRAC GOLD", program=_program("here are your fields: [")))


def test_schema_violation_yields_fallback():
    bad = json.dumps([{"id": "full_name", "label": "Full Name", "type": "text"}])  # missing `required`
    _assert_fallback(generate_dynamic_form("COTRAC GOLD", program=_program(bad)))


def test_unsupported_field_type_yields_fallback():
    bad = json.dumps([{"id": "dob", "label": "DOB", "type": "datetime-local", "required": False}])
    _assert_fallback(generate_dynamic_form("COTRAC GOLD", program=_program(bad)))


def test_empty_array_yields_fallback():
    _assert_fallback(generate_dynamic_form("COTRAC GOLD", program=_program("[]")))


def test_fallback_list_is_a_fresh_copy_each_time():
    first = generate_dynamic_form("COTRAC GOLD", program=_program("nope"))
    first[0].label = "changed"
    second = generate_dynamic_form("COTRAC GOLD", program=_program("nope"))
    assert second[0].label == "Full Name"


def test_valid_response_is_parsed_in_order():
    payload = [
        {"id": "email_address", "label": "Email", "type": "email", "required": True},
        {"id": "lead_source", "label": "Lead Source", "type": "select", "required": False,
         "options": ["BILLBOARD", "RADIO"]},
        {"id": "mileage", "label": "Mileage", "type": "number", "required": False, "placeholder": "KM"},
    ]
    program = _program("```json\n" + json.dumps(payload) + "\n```")
    fields = generate_dynamic_form("COTRAC ENTERPRISE", program=program)
    assert [f.id for f in fields] == ["email_address", "lead_source", "mileage"]
    assert fields[1].options == ["BILLBOARD", "RADIO"]
    assert fields[2].placeholder == "KM"
    assert program.calls[0]["plan_name"] == "COTRAC ENTERPRISE"


def test_parse_form_fields_rejects_non_array():
    with pytest.raises(ValueError):
        parse_form_fields('{"id": "full_name"}')


def test_brief_requests_fuel_fields_only_for_fuel_plans():
    assert is_fuel_plan("COTRAC ENTERPRISE")
    assert is_fuel_plan("fleet fuel watch")
    assert not is_fuel_plan("COTRAC GOLD")
    assert "fuel_capacity" in build_field_brief("COTRAC ENTERPRISE")
    assert "fuel_capacity" not in build_field_brief("COTRAC BASIC+")


def test_brief_names_plan_and_sections():
    brief = build_field_brief("COTRAC GOLD")
    assert '"COTRAC GOLD"' in brief
    assert "SECTION: Customer" in brief
    assert "SECTION: Vehicle" in brief
    assert '"BILLBOARD", "RADIO", "FRIEND", "STREET", "STICKER", "WEBSITE"' in brief


def test_lm_config_requires_provider_key(monkeypatch):
    _clear_lm_env(monkeypatch)
    assert make_dspy_lm_config() is None

    monkeypatch.setenv("GEMINI_API_KEY", "k")
    cfg = make_dspy_lm_config()
    assert cfg["model"] == "gemini/gemini-3-flash-preview"

    monkeypatch.setenv("DSPY_PROVIDER", "openai")
    assert make_dspy_lm_config() is None
    monkeypatch.setenv("OPENAI_API_KEY", "k")
    monkeypatch.setenv("DSPY_MODEL", "gpt-4o")
    assert make_dspy_lm_config()["model"] == "openai/gpt-4o"


def test_lm_config_rejects_unknown_provider(monkeypatch):
    monkeypatch.setenv("DSPY_PROVIDER", "carrier-pigeon")
    assert make_dspy_lm_config() is None
