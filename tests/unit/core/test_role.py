"""Tests for Role base class."""

from dataclasses import dataclass

import numpy as np

from dismal.core import Role
from dismal.roles import Consumer, Producer
from dismal.typing import Bool1D, Float1D
from tests.helpers.factories import mock_producer


@dataclass(slots=True)
class Inventory(Role):
    """Concrete role for testing."""

    on_hand: Float1D
    flags: Bool1D


def test_role_slots():
    role = Inventory(on_hand=np.zeros(10), flags=np.zeros(10, dtype=bool))
    assert not hasattr(role, "__dict__")


def test_role_size_from_first_field():
    role = Inventory(on_hand=np.ones(5), flags=np.zeros(5, dtype=bool))
    assert role.size == 5
    assert mock_producer(7).size == 7


def test_role_repr():
    role = Inventory(on_hand=np.ones(5), flags=np.zeros(5, dtype=bool))
    assert repr(role) == "Inventory(fields=2)"


def test_builtin_roles_are_roles():
    assert issubclass(Consumer, Role)
    assert issubclass(Producer, Role)
    assert Consumer.name == "Consumer"
    assert "pending_income" in Producer.__dataclass_fields__
