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

"""Social recovery wallet state machine.

Every mutating operation takes the calling address explicitly and returns an
`Ok` or `Err` result. A failed operation leaves the state untouched, with one
exception: `remove_guardian` keeps the removal even when the remaining
guardians can no longer satisfy the threshold.
"""

import typing as t
from dataclasses import dataclass, field, replace
from pathlib import Path

from social_wallet.constants import WALLET_JSON, WALLET_JSON_VERSION
from social_wallet.resource import LocalResource
from social_wallet.wallet_types import ErrorCode, Err, Ok, RecoveryProposal, Result


@dataclass
class WalletState(LocalResource):  # pylint: disable=too-many-instance-attributes
    """Owner, guardians and recovery proposals of a single wallet."""

    version: int = WALLET_JSON_VERSION
    owner: t.Optional[str] = None
    threshold: int = 0
    guardians: t.List[str] = field(default_factory=list)
    recovery_nonce: int = 0
    recoveries: t.Dict[int, RecoveryProposal] = field(default_factory=dict)
    votes: t.Dict[int, t.List[str]] = field(default_factory=dict)
    wallet_owners: t.List[str] = field(default_factory=list)
    path: t.Optional[Path] = None

    _file = WALLET_JSON

    @classmethod
    def load(cls, path: Path) -> "WalletState":
        """Load wallet state."""
        return super().load(path)  # type: ignore

    def _is_owner(self, address: str) -> bool:
        return address in self.wallet_owners

    def _active_recovery(
        self, recovery_id: int
    ) -> t.Union[RecoveryProposal, Err]:
        recovery = self.recoveries.get(recovery_id)
        if recovery is None or not recovery.active:
            return Err(ErrorCode.RECOVERY_NOT_ACTIVE)
        if recovery.completed:
            return Err(ErrorCode.RECOVERY_COMPLETED)
        return recovery

    def initialize(self, new_owner: str, threshold: int) -> Result[None]:
        """Set the owner and threshold; only allowed once."""
        if self.owner is not None:
            return Err(ErrorCode.UNAUTHORIZED)

        # Not validated against the guardian count, which is zero at this point
        self.owner = new_owner
        self.threshold = threshold
        self.wallet_owners.append(new_owner)
        return Ok()

    def add_guardian(self, caller: str, guardian: str) -> Result[None]:
        """Add a guardian."""
        if not self._is_owner(caller):
            return Err(ErrorCode.UNAUTHORIZED)
        if guardian in self.guardians:
            return Err(ErrorCode.UNAUTHORIZED)

        self.guardians.append(guardian)
        return Ok()

    def remove_guardian(self, caller: str, guardian: str) -> Result[None]:
        """Remove a guardian.

        The removal is kept even if the threshold check fails afterwards; the
        owner has to lower the threshold or add a guardian to make the wallet
        recoverable again.
        """
        if not self._is_owner(caller):
            return Err(ErrorCode.UNAUTHORIZED)
        if guardian not in self.guardians:
            return Err(ErrorCode.INVALID_GUARDIAN)

        self.guardians.remove(guardian)
        if self.threshold > self.get_guardian_count():
            return Err(ErrorCode.INVALID_THRESHOLD)
        return Ok()

    def update_threshold(self, caller: str, new_threshold: int) -> Result[None]:
        """Update the number of votes required by future recoveries."""
        if not self._is_owner(caller):
            return Err(ErrorCode.UNAUTHORIZED)
        if new_threshold > self.get_guardian_count() or new_threshold <= 0:
            return Err(ErrorCode.INVALID_THRESHOLD)

        self.threshold = new_threshold
        return Ok()

    def initiate_recovery(self, caller: str, proposed_owner: str) -> Result[int]:
        """Open a recovery proposal; the initiator's vote is counted."""
        if caller not in self.guardians:
            return Err(ErrorCode.INVALID_GUARDIAN)

        recovery_id = self.recovery_nonce
        self.recoveries[recovery_id] = RecoveryProposal(
            initiator=caller,
            proposed_owner=proposed_owner,
            vote_count=1,
            threshold=self.threshold,
        )
        self.votes[recovery_id] = [caller]
        self.recovery_nonce += 1
        return Ok(recovery_id)

    def support_recovery(self, caller: str, recovery_id: int) -> Result[None]:
        """Vote for an active recovery."""
        recovery = self._active_recovery(recovery_id)
        if isinstance(recovery, Err):
            return recovery

        # Checked against the current guardians, not those at initiation
        if caller not in self.guardians:
            return Err(ErrorCode.INVALID_GUARDIAN)
        if self.has_voted(recovery_id, caller):
            return Err(ErrorCode.ALREADY_VOTED)

        self.votes.setdefault(recovery_id, []).append(caller)
        recovery.vote_count += 1
        return Ok()

    def execute_recovery(  # pylint: disable=unused-argument
        self, caller: str, recovery_id: int
    ) -> Result[None]:
        """Transfer ownership once the recovery has enough votes.

        Any address may execute. The threshold compared against is the one
        recorded when the recovery was initiated.
        """
        recovery = self._active_recovery(recovery_id)
        if isinstance(recovery, Err):
            return recovery
        if recovery.vote_count < recovery.threshold:
            return Err(ErrorCode.THRESHOLD_NOT_MET)

        recovery.active = False
        recovery.completed = True

        if self.owner in self.wallet_owners:
            self.wallet_owners.remove(self.owner)
        self.owner = recovery.proposed_owner
        self.wallet_owners.append(recovery.proposed_owner)
        return Ok()

    def cancel_recovery(self, caller: str, recovery_id: int) -> Result[None]:
        """Cancel an active recovery."""
        if not self._is_owner(caller):
            return Err(ErrorCode.UNAUTHORIZED)

        recovery = self._active_recovery(recovery_id)
        if isinstance(recovery, Err):
            return recovery

        recovery.active = False
        return Ok()

    def get_owner(self) -> t.Optional[str]:
        """Current owner."""
        return self.owner

    def get_threshold(self) -> int:
        """Current threshold."""
        return self.threshold

    def is_guardian(self, address: str) -> bool:
        """Whether the address is a current guardian."""
        return address in self.guardians

    def get_guardians(self) -> t.List[str]:
        """Current guardians, in the order they were added."""
        return list(self.guardians)

    def get_guardian_count(self) -> int:
        """Number of current guardians."""
        return len(self.guardians)

    def get_recovery_nonce(self) -> int:
        """Id the next recovery will be given."""
        return self.recovery_nonce

    def get_recovery_status(self, recovery_id: int) -> t.Optional[RecoveryProposal]:
        """Copy of the recovery proposal, or None if it does not exist."""
        recovery = self.recoveries.get(recovery_id)
        if recovery is None:
            return None
        return replace(recovery)

    def has_voted(self, recovery_id: int, address: str) -> bool:
        """Whether the address voted on the recovery."""
        return address in self.votes.get(recovery_id, [])
