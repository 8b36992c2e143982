# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Forge JSON:API test suite.

This file sets up global fixtures, Hypothesis profiles and the logging
configuration for test runs.

Notes:
    Tests should respect the immutable/mutable configuration split: encoder
    options write to a `MutableEncoderConfig`, which the encoder freezes into an
    `EncoderConfig`. Never mutate a frozen config; call `thaw()` instead.

    Models used across tests are declared once in ``tests/models.py`` (the
    registry is process-global). Tests that need throwaway models declare them
    locally and drop them with the ``scratch_models`` fixture.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, TypeVar, cast

import logging as std_logging

import pytest
from hypothesis import HealthCheck, settings

from forge_jsonapi.config import logging
from forge_jsonapi.registry.registry import MetadataRegistry

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]

settings.register_profile("forge", max_examples=50, deadline=None)
settings.register_profile(
    "long",
    max_examples=1000,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("forge")


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


@pytest.fixture(autouse=True)
def silence_forge_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("FORGE_JSONAPI_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Restore the root logger after each test (CLI invocations reconfigure it)."""
    root = std_logging.getLogger()
    level, handlers, propagate = root.level, root.handlers[:], root.propagate
    yield
    root.setLevel(level)
    root.handlers[:] = handlers
    root.propagate = propagate


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so every log call is exercised.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def scratch_models() -> Iterator[list[type]]:
    """Collect model classes declared inside a test and unregister them afterwards.

    Yields:
        list[type]: Append every locally declared model class to this list.
    """
    declared: list[type] = []
    yield declared
    for model_type in declared:
        MetadataRegistry.unregister(model_type)
