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

"""Types module."""

import enum
import typing as t
from dataclasses import dataclass

from social_wallet.resource import LocalResource


T = t.TypeVar("T")


class ErrorCode(enum.IntEnum):
    """Error kinds returned by wallet operations.

    The integer values are stable identifiers shared with existing callers.
    """

    UNAUTHORIZED = 1
    INVALID_THRESHOLD = 2
    ALREADY_VOTED = 3
    RECOVERY_NOT_ACTIVE = 4
    INVALID_GUARDIAN = 5
    RECOVERY_IN_PROGRESS = 6  # reserved, never returned
    RECOVERY_COMPLETED = 7
    THRESHOLD_NOT_MET = 8

    def __str__(self) -> str:
        """String representation."""
        return self.name

    @property
    def message(self) -> str:
        """Human readable description."""
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    ErrorCode.UNAUTHORIZED: "Caller is not authorized to perform this operation.",
    ErrorCode.INVALID_THRESHOLD: "Threshold must be between 1 and the guardian count.",
    ErrorCode.ALREADY_VOTED: "Guardian has already voted on this recovery.",
    ErrorCode.RECOVERY_NOT_ACTIVE: "Recovery does not exist or is not active.",
    ErrorCode.INVALID_GUARDIAN: "Address is not a guardian.",
    ErrorCode.RECOVERY_IN_PROGRESS: "A recovery is already in progress.",
    ErrorCode.RECOVERY_COMPLETED: "Recovery has already been completed.",
    ErrorCode.THRESHOLD_NOT_MET: "Recovery has not reached its vote threshold.",
}


class WalletError(Exception):
    """Raised when an error result is unwrapped."""

    def __init__(self, code: ErrorCode) -> None:
        """Initialize object."""
        super().__init__(f"{code.name}: {code.message}")
        self.code = code


@dataclass(frozen=True)
class Ok(t.Generic[T]):
    """Successful result."""

    value: t.Optional[T] = None

    @property
    def is_ok(self) -> bool:
        """Whether the result is a success."""
        return True

    @property
    def is_err(self) -> bool:
        """Whether the result is an error."""
        return False

    def unwrap(self) -> t.Optional[T]:
        """Return the success value."""
        return self.value


@dataclass(frozen=True)
class Err:
    """Error result."""

    code: ErrorCode

    @property
    def is_ok(self) -> bool:
        """Whether the result is a success."""
        return False

    @property
    def is_err(self) -> bool:
        """Whether the result is an error."""
        return True

    def unwrap(self) -> t.NoReturn:
        """Raise the error."""
        raise WalletError(self.code)

    @property
    def json(self) -> t.Dict:
        """Json representation of the error."""
        return {
            "error": self.code.message,
            "code": int(self.code),
            "name": self.code.name,
        }


Result = t.Union[Ok[T], Err]


class RecoveryStatus(str, enum.Enum):
    """Recovery proposal status."""

    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    def __str__(self) -> str:
        """String representation."""
        return self.value


@dataclass
class RecoveryProposal(LocalResource):
    """Recovery proposal."""

    initiator: str
    proposed_owner: str
    vote_count: int
    threshold: int
    active: bool = True
    completed: bool = False

    @property
    def status(self) -> RecoveryStatus:
        """Lifecycle status derived from the flags."""
        if self.completed:
            return RecoveryStatus.COMPLETED
        if self.active:
            return RecoveryStatus.ACTIVE
        return RecoveryStatus.CANCELLED
