"""Configures pytest further."""
import random

import pytest

import rsacore


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme value extremely slow tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


class ScriptedRandom(random.SystemRandom):
    """A secure random source whose draws can be scripted for deterministic tests.

    Scripted values are handed out first, afterwards the OS CSPRNG takes over again.
    """

    bits: list[int]
    ranges: list[int]
    calls: list[tuple]

    def getrandbits(self, k):
        if self.bits:
            return self.bits.pop(0)
        return super().getrandbits(k)

    def randrange(self, start, stop=None, step=1):
        self.calls.append((start, stop))
        if self.ranges:
            return self.ranges.pop(0)
        return super().randrange(start, stop, step)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom instances."""

    def make(bits=(), ranges=()) -> ScriptedRandom:
        rng = ScriptedRandom()
        rng.bits = list(bits)
        rng.ranges = list(ranges)
        rng.calls = []
        return rng

    return make


@pytest.fixture
def textbook_pair() -> rsacore.KeyPair:
    """The classic p=61, q=53, e=17 key pair."""
    return rsacore.KeyPair(rsacore.PublicKey(17, 3233), rsacore.PrivateKey(2753, 3233))
