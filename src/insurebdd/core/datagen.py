"""Randomized insurance-domain records for scenarios.

Every generator builds a full default record and then deep-merges the caller's
partial `overrides` on top, so a step can pin only the fields it cares about.
"""

from __future__ import annotations

import copy
import logging
import os
import string
from collections.abc import Mapping
from datetime import date, timedelta
from typing import Any

from faker import Faker

from insurebdd.core import clock

logger = logging.getLogger(__name__)

VEHICLE_MODELS: dict[str, list[str]] = {
    "Toyota": ["Camry", "Corolla", "RAV4", "Highlander", "Tacoma"],
    "Honda": ["Civic", "Accord", "CR-V", "Pilot", "Odyssey"],
    "Ford": ["F-150", "Escape", "Explorer", "Mustang", "Transit"],
    "Chevrolet": ["Silverado", "Malibu", "Equinox", "Tahoe", "Bolt"],
    "BMW": ["3 Series", "5 Series", "X3", "X5", "i4"],
    "Mercedes": ["C-Class", "E-Class", "GLC", "GLE", "Sprinter"],
    "Audi": ["A3", "A4", "Q5", "Q7", "e-tron"],
    "Nissan": ["Altima", "Sentra", "Rogue", "Leaf", "Frontier"],
    "Hyundai": ["Elantra", "Sonata", "Tucson", "Santa Fe", "Kona"],
    "Subaru": ["Impreza", "Outback", "Forester", "Crosstrek", "Ascent"],
}
VIN_CHARS = "ABCDEFGHJKLMNPRSTUVWXYZ0123456789"

MARITAL_STATUSES = ("single", "married", "divorced", "widowed")
GENDERS = ("male", "female", "other")
EMPLOYMENT_TYPES = ("full-time", "part-time", "contractor", "unemployed", "retired")
VEHICLE_TYPES = ("sedan", "suv", "truck", "motorcycle", "van", "coupe")
FUEL_TYPES = ("gasoline", "diesel", "electric", "hybrid")
PROPERTY_TYPES = ("house", "condo", "apartment", "townhouse", "mobile-home")
CONSTRUCTION_TYPES = ("frame", "masonry", "steel", "concrete")
ROOF_TYPES = ("shingle", "tile", "metal", "flat")
BLOOD_TYPES = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")
SPECIALTIES = ("Family Medicine", "Internal Medicine", "Cardiology", "Pediatrics")
POLICY_TYPES = ("auto", "home", "life", "health", "business")
PAYMENT_FREQUENCIES = ("monthly", "quarterly", "semi-annual", "annual")

MEDICATIONS = ("Lisinopril", "Metformin", "Atorvastatin", "Omeprazole", "Amlodipine", "Metoprolol")
ALLERGIES = ("Peanuts", "Shellfish", "Penicillin", "Latex", "Pollen", "Dust mites", "Pet dander")
MEDICAL_CONDITIONS = ("Hypertension", "Diabetes", "Asthma", "High cholesterol", "Arthritis", "Depression")

INVALID_EMAILS = ("invalid-email", "test@", "@domain.com", "test@domain", "test..test@domain.com", "")
INVALID_PHONES = ("123", "abc-def-ghij", "+++123456789", "1234567890123456", "")
INVALID_SSNS = ("123-45-678", "000-00-0000", "123-00-0000", "12-345-6789", "")
INVALID_ZIP_CODES = ("1234", "123456", "ABCDE", "00000", "")


def deep_merge(target: Mapping[str, Any], override: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a copy of `target` with `override` merged in.

    Nested mappings merge key by key; any other override value (lists included)
    replaces the target value. `None` in the override leaves the target value alone.
    The result shares no nested objects with either argument.
    """
    result = copy.deepcopy(dict(target))
    for key, value in (override or {}).items():
        if value is None:
            continue
        current = result.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            result[key] = deep_merge(current, value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _age_on(born: date, on: date) -> int:
    return on.year - born.year - ((on.month, on.day) < (born.month, born.day))


def _add_years(d: date, years: int) -> date:
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        # Feb 29 -> Feb 28
        return d.replace(year=d.year + years, day=28)


class TestDataManager:
    __test__ = False  # not a pytest test class

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
        self._stored: dict[str, Any] = {}

    # ---- small field builders ----
    def _pick(self, choices: tuple[str, ...] | list[str]) -> str:
        return self.fake.random_element(list(choices))

    def _pick_some(self, choices: tuple[str, ...], max_count: int) -> list[str]:
        count = self.fake.random_int(min=0, max=max_count)
        if count == 0:
            return []
        return list(self.fake.random_elements(list(choices), length=count, unique=True))

    def _phone(self) -> str:
        return self.fake.numerify("###-###-####")

    def generate_ssn(self) -> str:
        area = self.fake.random_int(min=100, max=999)
        group = self.fake.random_int(min=10, max=99)
        serial = self.fake.random_int(min=1000, max=9999)
        return f"{area}-{group}-{serial}"

    def generate_license_plate(self) -> str:
        letters = self.fake.lexify("???", letters=string.ascii_uppercase)
        return f"{letters}{self.fake.random_int(min=100, max=999)}"

    def generate_policy_number(self) -> str:
        return "POL-" + self.fake.lexify("?" * 8, letters=string.ascii_uppercase + string.digits)

    def generate_vin(self) -> str:
        return self.fake.lexify("?" * 17, letters=VIN_CHARS)

    def _address(self) -> dict[str, str]:
        return {
            "street": self.fake.street_address(),
            "city": self.fake.city(),
            "state": self.fake.state_abbr(),
            "zip_code": self.fake.zipcode(),
        }

    # ---- domain records ----
    def generate_insurance_customer(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        first_name = self.fake.first_name()
        last_name = self.fake.last_name()
        today = clock.today()
        date_of_birth = self.fake.date_between_dates(date_start=_add_years(today, -80), date_end=_add_years(today, -18))
        domain = self.fake.free_email_domain()

        address = {**self._address(), "country": "USA"}
        address["full_address"] = f"{address['street']}, {address['city']}, {address['state']} {address['zip_code']}"

        customer = {
            "personal_info": {
                "first_name": first_name,
                "last_name": last_name,
                "full_name": f"{first_name} {last_name}",
                "email": f"{first_name}.{last_name}@{domain}".lower().replace(" ", ""),
                "phone": self._phone(),
                "date_of_birth": date_of_birth,
                "age": _age_on(date_of_birth, today),
                "ssn": self.generate_ssn(),
                "marital_status": self._pick(MARITAL_STATUSES),
                "gender": self._pick(GENDERS),
            },
            "address": address,
            "employment": {
                "company": self.fake.company(),
                "position": self.fake.job(),
                "industry": self.fake.bs().split()[-1],
                "annual_income": self.fake.random_int(min=25000, max=200000),
                "employment_type": self._pick(EMPLOYMENT_TYPES),
                "years_at_job": self.fake.random_int(min=0, max=20),
            },
            "financials": {
                "credit_score": self.fake.random_int(min=300, max=850),
                "annual_income": self.fake.random_int(min=25000, max=200000),
                "monthly_debt": self.fake.random_int(min=0, max=3000),
                "bank_account": self.fake.numerify("#" * 10),
                "routing_number": self.fake.aba(),
            },
        }
        return deep_merge(customer, overrides)

    def generate_vehicle(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        make = self._pick(list(VEHICLE_MODELS))
        vehicle = {
            "make": make,
            "model": self._pick(VEHICLE_MODELS[make]),
            "year": self.fake.random_int(min=2010, max=clock.today().year),
            "vin": self.generate_vin(),
            "license_plate": self.generate_license_plate(),
            "color": self.fake.safe_color_name(),
            "mileage": self.fake.random_int(min=0, max=200000),
            "vehicle_type": self._pick(VEHICLE_TYPES),
            "fuel_type": self._pick(FUEL_TYPES),
            "value": self.fake.random_int(min=5000, max=80000),
        }
        return deep_merge(vehicle, overrides)

    def generate_property(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        prop = {
            "type": self._pick(PROPERTY_TYPES),
            "address": self._address(),
            "details": {
                "year_built": self.fake.random_int(min=1950, max=clock.today().year),
                "square_footage": self.fake.random_int(min=800, max=5000),
                "bedrooms": self.fake.random_int(min=1, max=6),
                "bathrooms": self.fake.random_int(min=1, max=4),
                "property_value": self.fake.random_int(min=100000, max=1000000),
                "mortgage_balance": self.fake.random_int(min=0, max=800000),
                "construction_type": self._pick(CONSTRUCTION_TYPES),
                "roof_type": self._pick(ROOF_TYPES),
            },
            "safety": {
                "has_security_system": self.fake.boolean(),
                "has_fire_alarm": self.fake.boolean(),
                "has_sprinklers": self.fake.boolean(),
                "gated_community": self.fake.boolean(),
            },
        }
        return deep_merge(prop, overrides)

    def generate_health_info(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        feet = self.fake.random_int(min=4, max=6)
        inches = self.fake.random_int(min=0, max=11)
        health = {
            "height": f"{feet}'{inches}\"",
            "weight": self.fake.random_int(min=100, max=300),
            "blood_type": self._pick(BLOOD_TYPES),
            "smoker": self.fake.boolean(),
            "drinker": self.fake.boolean(),
            "medications": self._pick_some(MEDICATIONS, 3),
            "allergies": self._pick_some(ALLERGIES, 2),
            "medical_conditions": self._pick_some(MEDICAL_CONDITIONS, 2),
            "last_physical_exam": self.fake.date_between(start_date="-365d", end_date="today"),
            "primary_doctor": {
                "name": f"Dr. {self.fake.name()}",
                "phone": self._phone(),
                "specialty": self._pick(SPECIALTIES),
            },
        }
        return deep_merge(health, overrides)

    def generate_policy(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        effective_date = clock.today() - timedelta(days=self.fake.random_int(min=0, max=30))
        annual_premium = self.fake.random_int(min=500, max=5000)
        policy = {
            "policy_number": self.generate_policy_number(),
            "policy_type": self._pick(POLICY_TYPES),
            "coverage_amount": self.fake.random_int(min=10000, max=1000000),
            "deductible": self.fake.random_int(min=250, max=2500),
            "premium": {
                "monthly": round(annual_premium / 12),
                "quarterly": round(annual_premium / 4),
                "annual": annual_premium,
            },
            "effective_date": effective_date,
            "expiration_date": _add_years(effective_date, 1),
            "payment_frequency": self._pick(PAYMENT_FREQUENCIES),
        }
        return deep_merge(policy, overrides)

    # ---- negative testing ----
    def generate_invalid_email(self) -> str:
        return self._pick(INVALID_EMAILS)

    def generate_invalid_phone(self) -> str:
        return self._pick(INVALID_PHONES)

    def generate_invalid_ssn(self) -> str:
        return self._pick(INVALID_SSNS)

    def generate_invalid_zip_code(self) -> str:
        return self._pick(INVALID_ZIP_CODES)

    # ---- per-run store ----
    def store_data(self, key: str, data: Any) -> None:
        self._stored[key] = data

    def retrieve_data(self, key: str) -> Any:
        return self._stored.get(key)

    def clear_stored_data(self) -> None:
        self._stored.clear()


_MANAGER: TestDataManager | None = None


def _env_seed() -> int | None:
    raw = os.environ.get("FAKER_SEED")
    if not raw:
        return None
    try:
        return int(raw, 10)
    except ValueError:
        logger.warning("Ignoring FAKER_SEED=%r: not an integer, data will be unseeded", raw)
        return None


def get_data_manager() -> TestDataManager:
    global _MANAGER
    if _MANAGER is None:
        _MANAGER = TestDataManager(seed=_env_seed())
    return _MANAGER


def reset_data_manager() -> None:
    global _MANAGER
    _MANAGER = None
