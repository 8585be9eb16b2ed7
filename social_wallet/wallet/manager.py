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

"""Wallet state manager"""

import typing as t
from logging import Logger
from pathlib import Path
from threading import Lock

from social_wallet.constants import WALLET_JSON_VERSION
from social_wallet.wallet.state import WalletState
from social_wallet.wallet_types import Result


class WalletStateManager:
    """WalletStateManager"""

    def __init__(self, path: Path, logger: Logger) -> None:
        """Initialize wallet state manager."""
        self.path = path
        self.logger = logger
        self._lock = Lock()

        path.mkdir(parents=True, exist_ok=True)
        file = path / WalletState._file  # pylint: disable=protected-access
        if not file.exists():
            WalletState(path=path).store()

        self.state = WalletState.load(path)
        if self.state.version != WALLET_JSON_VERSION:
            raise ValueError(
                f"Wallet state version {self.state.version} is not supported. Expected version {WALLET_JSON_VERSION}."
            )

    def _apply(self, operation: str, *args: t.Any) -> Result:
        """Run a mutating operation and store the state if it changed."""
        with self._lock:
            before = self.state.json
            result = getattr(self.state, operation)(*args)
            if self.state.json != before:
                self.state.store()

            if result.is_err:
                self.logger.warning(
                    f"[WALLET STATE MANAGER] {operation}{args} rejected with {result.code.name}."
                )
            else:
                self.logger.info(f"[WALLET STATE MANAGER] {operation}{args} applied.")
            return result

    def initialize(self, new_owner: str, threshold: int) -> Result[None]:
        """Initialize the wallet."""
        return self._apply("initialize", new_owner, threshold)

    def add_guardian(self, caller: str, guardian: str) -> Result[None]:
        """Add a guardian."""
        return self._apply("add_guardian", caller, guardian)

    def remove_guardian(self, caller: str, guardian: str) -> Result[None]:
        """Remove a guardian."""
        return self._apply("remove_guardian", caller, guardian)

    def update_threshold(self, caller: str, new_threshold: int) -> Result[None]:
        """Update the threshold."""
        return self._apply("update_threshold", caller, new_threshold)

    def initiate_recovery(self, caller: str, proposed_owner: str) -> Result[int]:
        """Initiate a recovery."""
        return self._apply("initiate_recovery", caller, proposed_owner)

    def support_recovery(self, caller: str, recovery_id: int) -> Result[None]:
        """Support a recovery."""
        return self._apply("support_recovery", caller, recovery_id)

    def execute_recovery(self, caller: str, recovery_id: int) -> Result[None]:
        """Execute a recovery."""
        return self._apply("execute_recovery", caller, recovery_id)

    def cancel_recovery(self, caller: str, recovery_id: int) -> Result[None]:
        """Cancel a recovery."""
        return self._apply("cancel_recovery", caller, recovery_id)

    def is_guardian(self, address: str) -> bool:
        """Whether the address is a guardian."""
        with self._lock:
            return self.state.is_guardian(address)

    def has_voted(self, recovery_id: int, address: str) -> bool:
        """Whether the address voted on the recovery."""
        with self._lock:
            return self.state.has_voted(recovery_id, address)

    def recovery_json(self, recovery_id: int) -> t.Optional[t.Dict]:
        """Recovery proposal as json, or None if it does not exist."""
        with self._lock:
            recovery = self.state.get_recovery_status(recovery_id)
        if recovery is None:
            return None
        return {"id": recovery_id, **recovery.json, "status": str(recovery.status)}

    @property
    def json(self) -> t.Dict:
        """Json representation of the wallet state."""
        with self._lock:
            return {
                **self.state.json,
                "guardian_count": self.state.get_guardian_count(),
            }
