"""Ready-made insurance data combinations for common quote, claim and renewal flows."""

from __future__ import annotations

from typing import Any, Callable

from insurebdd.core.datagen import TestDataManager, deep_merge, get_data_manager


def _manager(manager: TestDataManager | None) -> TestDataManager:
    return manager or get_data_manager()


def auto_insurance_customer(manager: TestDataManager | None = None) -> dict[str, Any]:
    m = _manager(manager)
    customer = m.generate_insurance_customer(
        {
            "personal_info": {"age": 35, "marital_status": "married"},
            "employment": {"employment_type": "full-time", "annual_income": 75000},
            "financials": {"credit_score": 720},
        }
    )
    vehicle = m.generate_vehicle({"year": 2020, "vehicle_type": "sedan", "value": 25000})
    return {"customer": customer, "vehicle": vehicle}


def home_insurance_data(manager: TestDataManager | None = None) -> dict[str, Any]:
    m = _manager(manager)
    customer = m.generate_insurance_customer(
        {
            "personal_info": {"marital_status": "married", "age": 42},
            "employment": {"employment_type": "full-time", "annual_income": 95000},
        }
    )
    prop = m.generate_property(
        {
            "type": "house",
            "details": {
                "year_built": 2015,
                "square_footage": 2500,
                "property_value": 450000,
                "bedrooms": 4,
                "bathrooms": 3,
            },
            "safety": {"has_security_system": True, "has_fire_alarm": True},
        }
    )
    return {"customer": customer, "property": prop}


def life_insurance_applicant(manager: TestDataManager | None = None) -> dict[str, Any]:
    m = _manager(manager)
    customer = m.generate_insurance_customer(
        {
            "personal_info": {"age": 40, "marital_status": "married"},
            "employment": {"employment_type": "full-time", "annual_income": 85000},
        }
    )
    health_info = m.generate_health_info({"smoker": False, "drinker": False, "medical_conditions": []})
    policy = m.generate_policy({"policy_type": "life", "coverage_amount": 500000})
    return {"customer": customer, "health_info": health_info, "policy": policy}


def high_risk_customer(manager: TestDataManager | None = None) -> dict[str, Any]:
    return _manager(manager).generate_insurance_customer(
        {"personal_info": {"age": 22}, "financials": {"credit_score": 580}}
    )


def senior_customer(manager: TestDataManager | None = None) -> dict[str, Any]:
    m = _manager(manager)
    customer = m.generate_insurance_customer(
        {
            "personal_info": {"age": 68, "marital_status": "married"},
            "employment": {"employment_type": "retired"},
        }
    )
    health_info = m.generate_health_info(
        {
            "medications": ["Lisinopril", "Metformin"],
            "medical_conditions": ["Hypertension", "Diabetes"],
        }
    )
    return {"customer": customer, "health_info": health_info}


def business_insurance_data(manager: TestDataManager | None = None) -> dict[str, Any]:
    m = _manager(manager)
    owner = m.generate_insurance_customer(
        {
            "employment": {
                "employment_type": "full-time",
                "position": "Business Owner",
                "annual_income": 120000,
            }
        }
    )
    prop = m.generate_property({"type": "house", "details": {"square_footage": 3000, "property_value": 300000}})
    policy = m.generate_policy({"policy_type": "business", "coverage_amount": 1000000})
    return {"business_owner": owner, "property": prop, "policy": policy}


def multiple_quotes_data(manager: TestDataManager | None = None) -> dict[str, Any]:
    m = _manager(manager)
    return {
        "customer": m.generate_insurance_customer(),
        "vehicles": [
            m.generate_vehicle({"vehicle_type": "sedan", "year": 2019}),
            m.generate_vehicle({"vehicle_type": "suv", "year": 2021}),
            m.generate_vehicle({"vehicle_type": "truck", "year": 2018}),
        ],
    }


def claim_data(manager: TestDataManager | None = None) -> dict[str, Any]:
    """Build a claim triple and keep it in the run store for later scenarios."""
    m = _manager(manager)
    customer = m.generate_insurance_customer()
    vehicle = m.generate_vehicle()
    policy = m.generate_policy({"policy_type": "auto"})

    m.store_data("claimCustomer", customer)
    m.store_data("claimVehicle", vehicle)
    m.store_data("claimPolicy", policy)
    return {"customer": customer, "vehicle": vehicle, "policy": policy}


def invalid_customer_data(manager: TestDataManager | None = None) -> dict[str, Any]:
    m = _manager(manager)
    return {
        "email": m.generate_invalid_email(),
        "phone": m.generate_invalid_phone(),
        "ssn": m.generate_invalid_ssn(),
        "zip_code": m.generate_invalid_zip_code(),
    }


def renewal_data(manager: TestDataManager | None = None) -> dict[str, Any]:
    existing = _manager(manager).generate_insurance_customer()
    updated = deep_merge(
        existing,
        {
            "address": {"street": "Updated Street Address", "city": "New City"},
            "employment": {"annual_income": existing["employment"]["annual_income"] + 10000},
        },
    )
    return {"existing_customer": existing, "updated_customer": updated}


EXAMPLES: dict[str, Callable[[TestDataManager | None], Any]] = {
    "auto": auto_insurance_customer,
    "home": home_insurance_data,
    "life": life_insurance_applicant,
    "high-risk": high_risk_customer,
    "senior": senior_customer,
    "business": business_insurance_data,
    "multiple-quotes": multiple_quotes_data,
    "claim": claim_data,
    "invalid": invalid_customer_data,
    "renewal": renewal_data,
}
