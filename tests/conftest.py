"""
Shared fixtures for the object printing tests.
"""

import logging
import uuid

import pytest

from object_printing import PrinterSettings

from sample_models import Node, Owner, Person, Pet


@pytest.fixture
def settings():
    """
    Fixture that provides default settings, ignoring any .env file.
    """
    return PrinterSettings(_env_file=None)


@pytest.fixture
def person():
    """
    Fixture that provides the person used by the acceptance tests.
    """
    return Person(
        id=uuid.UUID("ffffffff-ffff-ffff-ffff-ffffffffffff"),
        name="Alex",
        age=19,
        height=179.5
    )


@pytest.fixture
def owner():
    """
    Fixture that provides an owner with one pet and no spare.
    """
    return Owner(name="Alex", pet=Pet(name="Rex", age=3))


@pytest.fixture
def node_chain():
    """
    Fixture that builds a linked list of the requested length.
    """
    def build(length):
        head = None
        for value in reversed(range(length)):
            head = Node(value=value, next=head)
        return head
    return build


@pytest.fixture
def restore_root_logger():
    """
    Fixture that restores the root logger's handlers and level after a test.
    """
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
