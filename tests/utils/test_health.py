# tests/utils/test_health.py

import pytest

from dynamic_tokens.components import Resource
from dynamic_tokens.documents import make_actor
from dynamic_tokens.utils.health import compute_percent, read_resource
from tests.test_utils import HP_PATH, make_hp_actor


def test_percent_of_remaining_health() -> None:
    assert compute_percent(Resource(value=30, max=40)) == pytest.approx(75.0)


def test_reversed_polarity_counts_damage() -> None:
    resource = read_resource(make_hp_actor(80, 100, reversed=True), HP_PATH)
    assert resource == Resource(value=80, max=100, reversed=True)
    assert compute_percent(resource) == pytest.approx(20.0)


def test_percent_is_not_clamped() -> None:
    assert compute_percent(Resource(value=15, max=10)) == pytest.approx(150.0)
    assert compute_percent(Resource(value=-5, max=10)) == pytest.approx(-50.0)


@pytest.mark.parametrize(
    "resource",
    [
        None,
        Resource(value=5, max=0),
        Resource(value=5, max=None),
        Resource(value=None, max=10),
    ],
)
def test_undefined_percent(resource: Resource) -> None:
    assert compute_percent(resource) is None


def test_read_resource_missing_container() -> None:
    actor = make_hp_actor(5, 10)
    assert read_resource(actor, "system.resources.hitPoints") is None
    assert read_resource(actor, "system.attributes.hp.value") is None


def test_read_resource_ignores_non_numeric_fields() -> None:
    resource = read_resource(make_hp_actor("five", True), HP_PATH)
    assert resource == Resource(value=None, max=None)
    assert compute_percent(resource) is None


@pytest.mark.parametrize("flag", ["false", "true", 1, "yes", None])
def test_reversed_flag_requires_a_real_bool(flag: object) -> None:
    actor = make_actor(
        "actor-1",
        system={"attributes": {"hp": {"value": 80, "max": 100, "reversed": flag}}},
    )
    resource = read_resource(actor, HP_PATH)
    assert resource is not None and resource.reversed is False
    assert compute_percent(resource) == pytest.approx(80.0)
