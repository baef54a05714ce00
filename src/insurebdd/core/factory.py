from __future__ import annotations

from typing import Any, Final

from faker import Faker

from insurebdd.core import clock

DEFAULT_PASSWORD = "Test@1234"

TEST_DATA: Final[dict[str, dict[str, Any]]] = {
    "users": {
        "valid_email": "test@example.com",
        "valid_password": DEFAULT_PASSWORD,
        "invalid_email": "invalid-email",
        "invalid_password": "short",
        "long_password": "ThisIsAVeryLongPasswordThatExceedsTheMaximumLengthAllowed",
    },
    "forms": {
        "empty_string": "",
        "special_characters": "!@#$%^&*()",
        "numbers_only": "1234567890",
        "letters_only": "abcdefghij",
        "mixed_content": "Test123!@#",
    },
    # milliseconds
    "timeouts": {
        "short": 5000,
        "medium": 10000,
        "long": 30000,
        "extra_long": 60000,
    },
    "environments": {
        "development": "dev",
        "staging": "staging",
        "production": "prod",
    },
    "browsers": {
        "chromium": "chromium",
        "firefox": "firefox",
        "webkit": "webkit",
        "edge": "edge",
    },
}


def generate_user(fake: Faker) -> dict[str, Any]:
    return {
        "email": fake.email(),
        "password": DEFAULT_PASSWORD,
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "phone": fake.numerify("###-###-####"),
        "address": {
            "street": fake.street_address(),
            "city": fake.city(),
            "state": fake.state(),
            "zip_code": fake.zipcode(),
            "country": "USA",
        },
        "date_of_birth": fake.date_of_birth(minimum_age=18, maximum_age=65),
    }


def generate_product(fake: Faker) -> dict[str, Any]:
    return {
        "name": " ".join(w.capitalize() for w in fake.words(nb=3)),
        "description": fake.sentence(nb_words=12),
        "price": float(fake.pydecimal(left_digits=3, right_digits=2, positive=True)),
        "category": fake.word().capitalize(),
        "sku": fake.bothify("??????####").upper(),
        "in_stock": fake.boolean(),
        "quantity": fake.random_int(min=0, max=100),
    }


def generate_company(fake: Faker) -> dict[str, Any]:
    return {
        "name": fake.company(),
        "email": fake.company_email(),
        "phone": fake.numerify("###-###-####"),
        "website": fake.url(),
        "address": {
            "street": fake.street_address(),
            "city": fake.city(),
            "state": fake.state(),
            "zip_code": fake.zipcode(),
        },
    }


def generate_credit_card(fake: Faker) -> dict[str, Any]:
    expiry = fake.date_between(start_date="+30d", end_date="+5y")
    return {
        "number": fake.credit_card_number(),
        "cvv": fake.credit_card_security_code(),
        "expiry_date": expiry.strftime("%Y-%m"),
    }


def generate_content(fake: Faker) -> dict[str, Any]:
    return {
        "title": fake.sentence(),
        "paragraph": fake.paragraph(),
        "sentences": " ".join(fake.sentences(nb=3)),
    }


def generate_unique_email(prefix: str = "test") -> str:
    stamp = int(clock.now_utc().timestamp() * 1000)
    return f"{prefix}_{stamp}@example.com"
