# SPDX-License-Identifier: Apache-2.0
"""
Shared pytest fixtures:
- Deterministic signers (seed = 0x00..0x1f, and the all-zero seed)
- Isolation of the `algo_sdk` logger between tests
- `set_config`: swap `algo_sdk.config.DEFAULT` for one test
"""
from __future__ import annotations

import logging

import pytest

from algo_sdk import config as sdk_config
from algo_sdk.wallet.signer import Signer


@pytest.fixture
def sender() -> Signer:
    # Deterministic test seed: 0x00, 0x01, ..., 0x1f
    return Signer.from_seed(bytes(range(32)))


@pytest.fixture
def zero_signer() -> Signer:
    return Signer.from_seed(bytes(32))


@pytest.fixture(autouse=True)
def _isolate_sdk_logger():
    """Undo whatever `algo_sdk.logging.configure()` did during a test."""
    logger = logging.getLogger("algo_sdk")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for h in list(logger.handlers):
        logger.removeHandler(h)
    for h in handlers:
        logger.addHandler(h)
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def set_config(monkeypatch: pytest.MonkeyPatch):
    """Swap the active SDKConfig for the duration of a test."""

    def _set(**overrides) -> sdk_config.SDKConfig:
        cfg = sdk_config.SDKConfig.with_overrides(sdk_config.SDKConfig(), **overrides)
        monkeypatch.setattr(sdk_config, "DEFAULT", cfg)
        return cfg

    return _set
