from __future__ import annotations

from datetime import date

import pytest

from insurebdd.core import datagen
from insurebdd.core.datagen import TestDataManager, deep_merge
from insurebdd.core.world import validate_email, validate_phone, validate_ssn, validate_zip_code


@pytest.fixture()
def manager(monkeypatch) -> TestDataManager:
    monkeypatch.setenv("INSUREBDD_TEST_NOW_ISO", "2025-06-15T12:00:00+00:00")
    return TestDataManager(seed=1234)


def test_deep_merge_override_wins_and_target_is_untouched() -> None:
    target = {"a": 1, "nested": {"x": 1, "y": 2}}
    merged = deep_merge(target, {"a": 2, "nested": {"y": 3}})
    assert merged == {"a": 2, "nested": {"x": 1, "y": 3}}
    assert target == {"a": 1, "nested": {"x": 1, "y": 2}}


def test_deep_merge_keeps_target_when_override_absent() -> None:
    target = {"a": 1, "nested": {"x": 1}}
    assert deep_merge(target, None) == target
    assert deep_merge(target, {"nested": {}}) == target
    assert deep_merge(target, {"a": None}) == target


def test_deep_merge_replaces_lists_and_mismatched_types() -> None:
    target = {"items": [1, 2, 3], "shape": {"kind": "circle"}}
    merged = deep_merge(target, {"items": [], "shape": "square"})
    assert merged == {"items": [], "shape": "square"}


def test_deep_merge_result_shares_no_nested_objects() -> None:
    target = {"customer": {"personal_info": {"name": "Ann"}, "tags": ["a"]}, "untouched": {"k": 1}}
    extra = {"k": [1]}
    merged = deep_merge(target, {"customer": {"address": {"city": "Leeds"}}, "extra": extra})

    merged["customer"]["personal_info"]["name"] = "Bob"
    merged["customer"]["tags"].append("b")
    merged["untouched"]["k"] = 2
    merged["extra"]["k"].append(2)

    assert target == {"customer": {"personal_info": {"name": "Ann"}, "tags": ["a"]}, "untouched": {"k": 1}}
    assert extra == {"k": [1]}


def test_deep_merge_adds_new_keys() -> None:
    assert deep_merge({"a": 1}, {"b": {"c": 2}}) == {"a": 1, "b": {"c": 2}}


def test_seeded_managers_repeat_themselves(monkeypatch) -> None:
    monkeypatch.setenv("INSUREBDD_TEST_NOW_ISO", "2025-06-15T12:00:00+00:00")
    first = TestDataManager(seed=7).generate_insurance_customer()
    second = TestDataManager(seed=7).generate_insurance_customer()
    assert first == second


def test_customer_contact_details_pass_validators(manager) -> None:
    for _ in range(10):
        customer = manager.generate_insurance_customer()
        info = customer["personal_info"]
        assert validate_email(info["email"]), info["email"]
        assert validate_phone(info["phone"]), info["phone"]
        assert validate_ssn(info["ssn"]), info["ssn"]
        assert validate_zip_code(customer["address"]["zip_code"]), customer["address"]["zip_code"]


def test_customer_age_matches_date_of_birth(manager) -> None:
    customer = manager.generate_insurance_customer()
    info = customer["personal_info"]
    born = info["date_of_birth"]
    today = date(2025, 6, 15)
    expected = today.year - born.year - ((today.month, today.day) < (born.month, born.day))
    assert info["age"] == expected
    assert 18 <= info["age"] <= 80
    assert info["full_name"] == f"{info['first_name']} {info['last_name']}"
    assert customer["address"]["country"] == "USA"
    assert customer["address"]["full_address"].startswith(customer["address"]["street"])


def test_customer_overrides_merge_into_defaults(manager) -> None:
    customer = manager.generate_insurance_customer(
        {"personal_info": {"first_name": "Jane"}, "financials": {"credit_score": 800}}
    )
    assert customer["personal_info"]["first_name"] == "Jane"
    assert customer["personal_info"]["last_name"]
    assert customer["financials"]["credit_score"] == 800
    assert "monthly_debt" in customer["financials"]


def test_vehicle_model_belongs_to_make(manager) -> None:
    for _ in range(10):
        vehicle = manager.generate_vehicle()
        assert vehicle["model"] in datagen.VEHICLE_MODELS[vehicle["make"]]
        assert len(vehicle["vin"]) == 17
        assert set(vehicle["vin"]) <= set(datagen.VIN_CHARS)
        assert 2010 <= vehicle["year"] <= 2025


def test_policy_dates_and_premium_split(manager) -> None:
    policy = manager.generate_policy({"policy_type": "home"})
    assert policy["policy_type"] == "home"
    assert policy["policy_number"].startswith("POL-")
    assert len(policy["policy_number"]) == 12
    effective = policy["effective_date"]
    assert date(2025, 5, 16) <= effective <= date(2025, 6, 15)
    assert policy["expiration_date"] == effective.replace(year=effective.year + 1)
    annual = policy["premium"]["annual"]
    assert policy["premium"]["monthly"] == round(annual / 12)
    assert policy["premium"]["quarterly"] == round(annual / 4)


def test_property_and_health_shapes(manager) -> None:
    prop = manager.generate_property({"details": {"bedrooms": 9}})
    assert prop["details"]["bedrooms"] == 9
    assert prop["type"] in datagen.PROPERTY_TYPES
    health = manager.generate_health_info({"medications": []})
    assert health["medications"] == []
    assert set(health["allergies"]) <= set(datagen.ALLERGIES)
    assert health["primary_doctor"]["name"].startswith("Dr. ")


@pytest.mark.parametrize(
    ("values", "validator"),
    [
        (datagen.INVALID_EMAILS, validate_email),
        (datagen.INVALID_PHONES, validate_phone),
        (datagen.INVALID_SSNS, validate_ssn),
        (datagen.INVALID_ZIP_CODES, validate_zip_code),
    ],
)
def test_invalid_samples_fail_validation(values, validator) -> None:
    for value in values:
        assert not validator(value), value


def test_invalid_pickers_draw_from_samples(manager) -> None:
    assert manager.generate_invalid_email() in datagen.INVALID_EMAILS
    assert manager.generate_invalid_phone() in datagen.INVALID_PHONES
    assert manager.generate_invalid_ssn() in datagen.INVALID_SSNS
    assert manager.generate_invalid_zip_code() in datagen.INVALID_ZIP_CODES


def test_run_store_round_trip(manager) -> None:
    manager.store_data("customer", {"id": 1})
    assert manager.retrieve_data("customer") == {"id": 1}
    assert manager.retrieve_data("missing") is None
    manager.clear_stored_data()
    assert manager.retrieve_data("customer") is None


def test_shared_manager_uses_faker_seed(monkeypatch) -> None:
    monkeypatch.setenv("FAKER_SEED", "99")
    datagen.reset_data_manager()
    try:
        first = datagen.get_data_manager()
        assert datagen.get_data_manager() is first
        assert first.generate_ssn() == TestDataManager(seed=99).generate_ssn()
    finally:
        datagen.reset_data_manager()


def test_shared_manager_ignores_non_integer_faker_seed(monkeypatch, caplog) -> None:
    monkeypatch.setenv("FAKER_SEED", "abc")
    datagen.reset_data_manager()
    try:
        manager = datagen.get_data_manager()
        assert validate_ssn(manager.generate_ssn())
        assert "Ignoring FAKER_SEED='abc'" in caplog.text
    finally:
        datagen.reset_data_manager()
