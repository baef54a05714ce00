"""Insurance test-data steps. None of these need a browser."""

from __future__ import annotations

from pytest_bdd import when, then, parsers

from insurebdd.core import examples
from insurebdd.core.world import World, validate_email, validate_phone, validate_ssn, validate_zip_code

_INVALID_PICKERS = {
    "email": World.invalid_email,
    "phone": World.invalid_phone,
    "SSN": World.invalid_ssn,
    "zip code": World.invalid_zip_code,
}

_VALIDATORS = {
    "email": validate_email,
    "phone": validate_phone,
    "SSN": validate_ssn,
    "zip code": validate_zip_code,
}


@when("I generate a random customer")
def when_generate_customer(world: World) -> None:
    customer = world.generate_insurance_customer()
    world.set_scenario_data("generated_customer", customer)
    world.log_message(f"Generated customer: {customer['personal_info']['full_name']}", "debug")


@when("I generate a random vehicle")
def when_generate_vehicle(world: World) -> None:
    vehicle = world.generate_vehicle()
    world.set_scenario_data("generated_vehicle", vehicle)
    world.log_message(f"Generated vehicle: {vehicle['year']} {vehicle['make']} {vehicle['model']}", "debug")


@when(parsers.parse("I generate a {policy_type} policy"))
def when_generate_policy(world: World, policy_type: str) -> None:
    world.set_scenario_data("generated_policy", world.generate_policy({"policy_type": policy_type}))


@when(parsers.parse('I load the "{name}" insurance example'))
def when_load_example(world: World, name: str) -> None:
    builder = examples.EXAMPLES.get(name)
    if builder is None:
        raise ValueError(f"Unknown insurance example: {name}. Known: {', '.join(sorted(examples.EXAMPLES))}")
    world.set_scenario_data("example", builder(world.data))


@when(parsers.parse("I use invalid {kind} data"))
def when_use_invalid(world: World, kind: str) -> None:
    picker = _INVALID_PICKERS.get(kind)
    if picker is None:
        raise ValueError(f"Unknown invalid data kind: {kind}")
    value = picker(world)
    world.set_scenario_data(f"invalid_{kind.lower().replace(' ', '_')}", value)
    world.log_message(f"Using invalid {kind}: {value!r}", "debug")


@when(parsers.parse('I store the generated customer as "{key}"'))
def when_store_customer(world: World, key: str) -> None:
    world.store_data(key, world.get_scenario_data("generated_customer"))


@then(parsers.parse("the generated customer should have a valid {kind}"))
def then_customer_field_valid(world: World, kind: str) -> None:
    customer = world.get_scenario_data("generated_customer")
    assert customer is not None, "No customer was generated in this scenario"
    if kind == "zip code":
        value = customer["address"]["zip_code"]
    else:
        value = customer["personal_info"][kind.lower()]
    assert _VALIDATORS[kind](value), f"Generated {kind} is not valid: {value!r}"


@then(parsers.parse("the generated vehicle should be a {year_from:d} or newer model"))
def then_vehicle_year(world: World, year_from: int) -> None:
    vehicle = world.get_scenario_data("generated_vehicle")
    assert vehicle["year"] >= year_from
    assert len(vehicle["vin"]) == 17


@then(parsers.parse("the generated policy should be of type {policy_type}"))
def then_policy_type(world: World, policy_type: str) -> None:
    policy = world.get_scenario_data("generated_policy")
    assert policy["policy_type"] == policy_type
    assert policy["policy_number"].startswith("POL-")
    assert policy["expiration_date"] > policy["effective_date"]


@then(parsers.parse("the invalid {kind} should fail validation"))
def then_invalid_rejected(world: World, kind: str) -> None:
    value = world.get_scenario_data(f"invalid_{kind.lower().replace(' ', '_')}")
    assert value is not None, f"No invalid {kind} was picked in this scenario"
    assert not _VALIDATORS[kind](value), f"Expected {value!r} to be rejected as {kind}"


@then(parsers.parse('the stored "{key}" record should match the generated customer'))
def then_stored_matches(world: World, key: str) -> None:
    assert world.retrieve_data(key) == world.get_scenario_data("generated_customer")


@then(parsers.parse('the example should contain "{part}"'))
def then_example_contains(world: World, part: str) -> None:
    example = world.get_scenario_data("example")
    assert isinstance(example, dict) and part in example, f"{part!r} missing from example"
