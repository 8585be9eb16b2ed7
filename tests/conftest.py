# -*- coding: utf-8 -*-
# ------------------------------------------------------------------------------
#
#   Copyright 2026 Valory AG
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#
# ------------------------------------------------------------------------------

"""
Fixtures for pytest

The conftest.py file serves as a means of providing fixtures for an entire
directory. Fixtures defined in a conftest.py can be used by any test in that
package without needing to import them (pytest will automatically discover them).

See https://docs.pytest.org/en/stable/reference/fixtures.html
"""

import typing as t
from logging import getLogger
from pathlib import Path

import pytest

from social_wallet.wallet.manager import WalletStateManager
from social_wallet.wallet.state import WalletState


OWNER = "O"
GUARDIANS = ("G1", "G2", "G3")


def _make_wallet(threshold: int = 2, guardians: tuple = GUARDIANS) -> WalletState:
    """Initialized wallet with the given guardians."""
    wallet = WalletState()
    assert wallet.initialize(OWNER, threshold).is_ok
    for guardian in guardians:
        assert wallet.add_guardian(OWNER, guardian).is_ok
    return wallet


@pytest.fixture
def wallet_factory() -> t.Callable[..., WalletState]:
    """Factory for initialized wallets owned by O."""
    return _make_wallet


@pytest.fixture
def wallet() -> WalletState:
    """Wallet owned by O with guardians G1, G2, G3 and threshold 2."""
    return _make_wallet()


@pytest.fixture
def manager(tmp_path: Path) -> WalletStateManager:
    """Wallet state manager stored under a temporary directory."""
    return WalletStateManager(path=tmp_path / "wallet", logger=getLogger("test"))
