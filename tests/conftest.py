"""
Shared pytest fixtures for the resolver editor test suite.

Widget tests run on Qt's offscreen platform so no display is required.
The config manager always writes into a per-test temporary directory.
"""

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from core.binding import Binding
from defaults.config_manager import ConfigManager
from defaults.resolver_default import (
    DoHConfiguration,
    DoTConfiguration,
    OnDemandRule,
    Resolver,
)
from managers.resolver_store import ResolverStore
from managers.signals import StoreSignals


# ---------------------------------------------------------------------------
# Qt
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def qapp():
    """Return the process-wide QApplication, creating it once."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


# ---------------------------------------------------------------------------
# Model helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def dot_resolver() -> Resolver:
    return Resolver(
        name="My Server",
        configuration=DoTConfiguration(
            servers=["1.1.1.1", "1.0.0.1"],
            server_name="cloudflare-dns.com",
        ),
        on_demand_rules=[OnDemandRule(name="Home"), OnDemandRule(name="Office")],
    )


@pytest.fixture
def doh_resolver() -> Resolver:
    return Resolver(
        name="DoH Server",
        configuration=DoHConfiguration(
            servers=["8.8.8.8"],
            server_url="https://dns.google/dns-query",
        ),
    )


@pytest.fixture
def resolver_binding(dot_resolver) -> Binding:
    return Binding.constant(dot_resolver)


@pytest.fixture
def enabled_binding() -> Binding:
    return Binding.constant(False)


# ---------------------------------------------------------------------------
# Config / store
# ---------------------------------------------------------------------------


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "data" / "user_config.json"


@pytest.fixture
def config_manager(config_path) -> ConfigManager:
    return ConfigManager(str(config_path))


@pytest.fixture
def store_signals(qapp) -> StoreSignals:
    return StoreSignals()


@pytest.fixture
def store(config_manager, store_signals) -> ResolverStore:
    return ResolverStore(config_manager, store_signals, autosave=True)
