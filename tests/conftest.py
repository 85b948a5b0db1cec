"""Shared pytest fixtures for corelog tests.

Provides configs rooted in a temporary directory, in-memory collaborators,
and a fresh ``LoggerContext`` that is closed after each test.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from corelog.config import CoreLogConfig
from corelog.context import LoggerContext
from corelog.environment.static import StaticEnvironmentProbe
from corelog.sinks.memory import MemoryDestination
from corelog.storage.counters import IssueCounterStore
from corelog.storage.preferences import MemoryPreferenceStore

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def config(tmp_path: Path) -> CoreLogConfig:
    """Return a config whose storage lives under ``tmp_path``.

    ``_env_file=None`` keeps a developer's ``.env`` out of the tests.
    """
    return CoreLogConfig(
        _env_file=None,  # type: ignore[call-arg]
        cache_dir=tmp_path / "cache",
        preferences_path=tmp_path / "prefs" / "preferences.json",
        version_stamp="9.9.9",
        destination="memory",
    )


@pytest.fixture
def memory_destination() -> MemoryDestination:
    return MemoryDestination()


@pytest.fixture
def preferences() -> MemoryPreferenceStore:
    return MemoryPreferenceStore()


@pytest.fixture
def counter_store(tmp_path: Path) -> IssueCounterStore:
    return IssueCounterStore(tmp_path / "cache")


@pytest.fixture
def make_context(
    config: CoreLogConfig,
    memory_destination: MemoryDestination,
    preferences: MemoryPreferenceStore,
    counter_store: IssueCounterStore,
) -> Iterator[Callable[..., LoggerContext]]:
    """Factory building contexts on the shared in-memory collaborators.

    Keyword arguments override the ``LoggerContext`` defaults. Every
    context built is closed at teardown.
    """
    built: list[LoggerContext] = []

    def factory(
        *,
        restricted: bool = False,
        os_major_version: int = 20,
        argv: list[str] | None = None,
        **overrides: object,
    ) -> LoggerContext:
        ctx_config = overrides.pop("config", config)
        kwargs: dict[str, object] = {
            "environment": StaticEnvironmentProbe(os_major_version, restricted),
            "preferences": preferences,
            "counters": counter_store,
            "destination": memory_destination,
            "argv": argv if argv is not None else [],
        }
        kwargs.update(overrides)
        ctx = LoggerContext(ctx_config, **kwargs)  # type: ignore[arg-type]
        built.append(ctx)
        return ctx

    yield factory

    for ctx in built:
        ctx.close()


@pytest.fixture
def context(make_context: Callable[..., LoggerContext]) -> LoggerContext:
    """Return an unrestricted context with no launch arguments."""
    return make_context()


@pytest.fixture
def system_logger(request: pytest.FixtureRequest) -> Iterator[logging.Logger]:
    """Return a stdlib logger private to the current test.

    Its level, handlers and propagation are restored at teardown, since
    the ``logging`` destination adjusts them.
    """
    log = logging.getLogger(f"corelog.tests.{request.node.name}")
    yield log
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()
    log.setLevel(logging.NOTSET)
    log.propagate = True
