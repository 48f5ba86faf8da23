"""Test class MemoryRegister."""

import math
import sys

import pytest

from calculator_errors import CalculatorError, ErrorKind
from memory_register import MemoryRegister


@pytest.fixture
def memory():
    return MemoryRegister()


def test_starts_empty(memory):
    assert memory.recall() == 0
    assert not memory.has_value()


def test_store_recall_clear(memory):
    memory.store(42)
    assert memory.recall() == 42
    assert memory.has_value()

    memory.clear()
    assert memory.recall() == 0
    assert not memory.has_value()


def test_store_overwrites(memory):
    memory.store(1)
    memory.store(-3.5)
    assert memory.recall() == -3.5


def test_add(memory):
    memory.store(10)
    memory.add(5)
    memory.add(-15)
    assert memory.recall() == 0
    assert not memory.has_value()


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, "1", None])
def test_invalid_values(memory, value):
    memory.store(2)
    for operation in (memory.store, memory.add):
        with pytest.raises(CalculatorError) as info:
            operation(value)
        assert info.value.kind is ErrorKind.INVALID_VALUE
    assert memory.recall() == 2


def test_add_overflow(memory):
    """The sum is not committed when it overflows."""
    memory.store(sys.float_info.max)
    with pytest.raises(CalculatorError) as info:
        memory.add(sys.float_info.max)
    assert info.value.kind is ErrorKind.OVERFLOW
    assert memory.recall() == sys.float_info.max
