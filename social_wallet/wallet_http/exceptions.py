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

"""Exceptions."""

import typing as t
from http import HTTPStatus

from social_wallet.wallet_types import ErrorCode


class ResourceException(Exception):
    """Base resource exception."""

    code: int

    def __init__(self, message: str, error_code: t.Optional[ErrorCode] = None) -> None:
        """Initialize object."""
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    @property
    def json(self) -> t.Dict:
        """Json representation of the error."""
        if self.error_code is None:
            return {"error": self.message}
        return {
            "error": self.message,
            "code": int(self.error_code),
            "name": self.error_code.name,
        }


class BadRequest(ResourceException):
    """Bad request error."""

    code = HTTPStatus.BAD_REQUEST


class Unauthorized(ResourceException):
    """Unauthorized error."""

    code = HTTPStatus.UNAUTHORIZED


class Conflict(ResourceException):
    """Conflict error."""

    code = HTTPStatus.CONFLICT


class NotFound(ResourceException):
    """Not found error."""

    code = HTTPStatus.NOT_FOUND


ERROR_CODE_TO_EXCEPTION: t.Dict[ErrorCode, t.Type[ResourceException]] = {
    ErrorCode.UNAUTHORIZED: Unauthorized,
    ErrorCode.INVALID_THRESHOLD: BadRequest,
    ErrorCode.ALREADY_VOTED: Conflict,
    ErrorCode.RECOVERY_NOT_ACTIVE: NotFound,
    ErrorCode.INVALID_GUARDIAN: BadRequest,
    ErrorCode.RECOVERY_IN_PROGRESS: Conflict,
    ErrorCode.RECOVERY_COMPLETED: Conflict,
    ErrorCode.THRESHOLD_NOT_MET: BadRequest,
}


def exception_for(code: ErrorCode) -> ResourceException:
    """Resource exception for a wallet error."""
    return ERROR_CODE_TO_EXCEPTION[code](code.message, error_code=code)
