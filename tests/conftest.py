"""Shared test fixtures and fake contracts."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from sorotask import (
    Address,
    DirectoryInvoker,
    Env,
    EventLog,
    ManualClock,
    MockAllAuths,
    TaskConfig,
    TaskContract,
)

LEDGER_START = 1_700_000_000


class RecordingTarget:
    """Target contract that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def f(self, *args):
        self.calls.append(args)
        return "ignored"

    def explode(self, *args):
        raise RuntimeError("target exploded")


class FixedResolver:
    """Resolver whose check_condition returns (or raises) a fixed answer."""

    def __init__(self, answer=True) -> None:
        self.answer = answer
        self.calls: list[tuple] = []

    def check_condition(self, *args):
        self.calls.append(args)
        if isinstance(self.answer, BaseException):
            raise self.answer
        return self.answer


@pytest.fixture
def clock():
    """Ledger clock starting at a realistic timestamp."""
    return ManualClock(now=LEDGER_START)


@pytest.fixture
def invoker():
    return DirectoryInvoker()


@pytest.fixture
def events():
    return EventLog()


@pytest.fixture
def env(invoker, clock, events):
    """Env that authorizes everyone."""
    return Env(signer=MockAllAuths(), invoker=invoker, clock=clock, events=events)


@pytest.fixture
def contract(env):
    return TaskContract(env)


@pytest.fixture
def creator():
    return Address("GCREATOR")


@pytest.fixture
def target_contract():
    return RecordingTarget()


@pytest.fixture
def target(invoker, target_contract):
    """Address of the deployed RecordingTarget."""
    return invoker.deploy(target_contract, Address("CTARGET"))


@pytest.fixture
def make_config(creator, target):
    """Factory for TaskConfig with sensible defaults."""

    def factory(**overrides) -> TaskConfig:
        fields = {
            "creator": creator,
            "target": target,
            "function": "f",
            "interval": 100,
            "gas_balance": 1000,
        }
        fields.update(overrides)
        return TaskConfig(**fields)

    return factory


@pytest.fixture
def deploy_resolver(invoker):
    """Deploy a FixedResolver and return (address, resolver)."""

    def factory(answer=True) -> tuple[Address, FixedResolver]:
        resolver = FixedResolver(answer)
        return invoker.deploy(resolver), resolver

    return factory
