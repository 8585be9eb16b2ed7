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

"""Social wallet app CLI module."""

import asyncio
import functools
import json
import traceback
import typing as t
from concurrent.futures import ThreadPoolExecutor
from http import HTTPStatus
from pathlib import Path

from aea.helpers.logging import setup_logger
from clea import group, params, run
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing_extensions import Annotated
from uvicorn.config import Config
from uvicorn.server import Server

from social_wallet import __version__
from social_wallet.constants import DEFAULT_HOST, DEFAULT_PORT, SOCIAL_WALLET_HOME
from social_wallet.wallet.manager import WalletStateManager
from social_wallet.wallet_http.exceptions import (
    BadRequest,
    NotFound,
    ResourceException,
    exception_for,
)
from social_wallet.wallet_types import Err, Result


logger = setup_logger(name="social_wallet")


def _is_int(value: t.Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_address(value: t.Any) -> bool:
    return isinstance(value, str) and value != ""


def _unwrap(result: Result) -> t.Any:
    """Return the result value or raise the matching resource exception."""
    if isinstance(result, Err):
        raise exception_for(result.code)
    return result.value


async def _json_body(request: Request) -> t.Dict:
    """Request body as a JSON object."""
    try:
        data = await request.json()
    except json.JSONDecodeError as e:
        raise BadRequest("Request body must be valid JSON.") from e
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object.")
    return data


def _recovery_id(request: Request) -> int:
    try:
        return int(request.path_params["recovery_id"])
    except ValueError as e:
        raise BadRequest("Recovery id must be an integer.") from e


class SocialWalletApp:
    """Social wallet app."""

    def __init__(
        self,
        home: t.Optional[Path] = None,
    ) -> None:
        """Initialize object."""
        self._path = (home or SOCIAL_WALLET_HOME).resolve()
        self.wallet_manager = WalletStateManager(path=self._path, logger=logger)

    @property
    def json(self) -> dict:
        """Json representation of the app."""
        return {
            "name": "Social wallet HTTP server",
            "version": __version__,
            "home": str(self._path),
        }


def create_app(  # pylint: disable=too-many-locals, too-many-statements
    home: t.Optional[Path] = None,
) -> FastAPI:
    """Create FastAPI object."""
    wallet_app = SocialWalletApp(home=home)
    manager = wallet_app.wallet_manager
    thread_pool_executor = ThreadPoolExecutor(
        max_workers=4, thread_name_prefix="social_wallet"
    )

    async def run_in_executor(fn: t.Callable, *args: t.Any) -> t.Any:
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(thread_pool_executor, fn, *args)

    def _wallet_json() -> t.Dict:
        return manager.json

    app = FastAPI()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
    )

    def with_error_handling(f: t.Callable) -> t.Callable:
        """Error handling decorator."""

        @functools.wraps(f)
        async def _call(request: Request) -> JSONResponse:
            """Call the endpoint."""
            try:
                return await f(request)
            except ResourceException as e:
                return JSONResponse(content=e.json, status_code=e.code)
            except Exception as e:  # pylint: disable=broad-except
                logger.error(f"Error {str(e)}\n{traceback.format_exc()}")
                return JSONResponse(
                    content={
                        "error": "Operation failed. Please check the logs."
                    },
                    status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
                )

        return _call

    @app.get("/api")
    @with_error_handling
    async def _get_api(request: Request) -> JSONResponse:
        """Get API info."""
        return JSONResponse(content=wallet_app.json)

    @app.get("/api/wallet")
    @with_error_handling
    async def _get_wallet(request: Request) -> JSONResponse:
        """Get the wallet state."""
        return JSONResponse(content=await run_in_executor(_wallet_json))

    @app.post("/api/wallet")
    @with_error_handling
    async def _initialize_wallet(request: Request) -> JSONResponse:
        """Initialize the wallet."""
        data = await _json_body(request)
        owner = data.get("owner")
        threshold = data.get("threshold")
        if not _is_address(owner) or not _is_int(threshold):
            raise BadRequest("'owner' and integer 'threshold' are required.")

        _unwrap(await run_in_executor(manager.initialize, owner, threshold))
        return JSONResponse(content=await run_in_executor(_wallet_json))

    @app.post("/api/wallet/guardians")
    @with_error_handling
    async def _add_guardian(request: Request) -> JSONResponse:
        """Add a guardian."""
        data = await _json_body(request)
        caller = data.get("caller")
        guardian = data.get("guardian")
        if not _is_address(caller) or not _is_address(guardian):
            raise BadRequest("'caller' and 'guardian' are required.")

        _unwrap(await run_in_executor(manager.add_guardian, caller, guardian))
        return JSONResponse(content=await run_in_executor(_wallet_json))

    @app.delete("/api/wallet/guardians/{guardian}")
    @with_error_handling
    async def _remove_guardian(request: Request) -> JSONResponse:
        """Remove a guardian."""
        data = await _json_body(request)
        caller = data.get("caller")
        if not _is_address(caller):
            raise BadRequest("'caller' is required.")

        _unwrap(
            await run_in_executor(
                manager.remove_guardian, caller, request.path_params["guardian"]
            )
        )
        return JSONResponse(content=await run_in_executor(_wallet_json))

    @app.get("/api/wallet/guardians/{address}")
    @with_error_handling
    async def _is_guardian(request: Request) -> JSONResponse:
        """Check guardian membership."""
        address = request.path_params["address"]
        is_guardian = await run_in_executor(manager.is_guardian, address)
        return JSONResponse(content={"address": address, "is_guardian": is_guardian})

    @app.put("/api/wallet/threshold")
    @with_error_handling
    async def _update_threshold(request: Request) -> JSONResponse:
        """Update the threshold."""
        data = await _json_body(request)
        caller = data.get("caller")
        threshold = data.get("threshold")
        if not _is_address(caller) or not _is_int(threshold):
            raise BadRequest("'caller' and integer 'threshold' are required.")

        _unwrap(await run_in_executor(manager.update_threshold, caller, threshold))
        return JSONResponse(content=await run_in_executor(_wallet_json))

    @app.post("/api/wallet/recovery")
    @with_error_handling
    async def _initiate_recovery(request: Request) -> JSONResponse:
        """Initiate a recovery."""
        data = await _json_body(request)
        caller = data.get("caller")
        proposed_owner = data.get("proposed_owner")
        if not _is_address(caller) or not _is_address(proposed_owner):
            raise BadRequest("'caller' and 'proposed_owner' are required.")

        recovery_id = _unwrap(
            await run_in_executor(manager.initiate_recovery, caller, proposed_owner)
        )
        return JSONResponse(
            content={
                "recovery_id": recovery_id,
                "recovery": await run_in_executor(manager.recovery_json, recovery_id),
            },
            status_code=HTTPStatus.CREATED,
        )

    @app.get("/api/wallet/recovery/{recovery_id}")
    @with_error_handling
    async def _get_recovery(request: Request) -> JSONResponse:
        """Get a recovery."""
        recovery_id = _recovery_id(request)
        recovery = await run_in_executor(manager.recovery_json, recovery_id)
        if recovery is None:
            raise NotFound(f"Recovery {recovery_id} not found")
        return JSONResponse(content=recovery)

    @app.get("/api/wallet/recovery/{recovery_id}/votes/{address}")
    @with_error_handling
    async def _has_voted(request: Request) -> JSONResponse:
        """Check whether an address voted on a recovery."""
        recovery_id = _recovery_id(request)
        address = request.path_params["address"]
        has_voted = await run_in_executor(manager.has_voted, recovery_id, address)
        return JSONResponse(
            content={
                "recovery_id": recovery_id,
                "address": address,
                "has_voted": has_voted,
            }
        )

    def _recovery_action(operation: t.Callable) -> t.Callable:
        """Build a handler for an action on an existing recovery."""

        async def _action(request: Request) -> JSONResponse:
            recovery_id = _recovery_id(request)
            data = await _json_body(request)
            caller = data.get("caller")
            if not _is_address(caller):
                raise BadRequest("'caller' is required.")

            _unwrap(await run_in_executor(operation, caller, recovery_id))
            return JSONResponse(
                content=await run_in_executor(manager.recovery_json, recovery_id)
            )

        return with_error_handling(_action)

    app.post("/api/wallet/recovery/{recovery_id}/support")(
        _recovery_action(manager.support_recovery)
    )
    app.post("/api/wallet/recovery/{recovery_id}/execute")(
        _recovery_action(manager.execute_recovery)
    )
    app.post("/api/wallet/recovery/{recovery_id}/cancel")(
        _recovery_action(manager.cancel_recovery)
    )

    return app


def run_daemon(host: str, port: int, home: t.Optional[Path] = None) -> None:
    """Serve the wallet over HTTP until interrupted."""
    app = create_app(home=home)
    logger.info(f"Serving social wallet on {host}:{port}")
    server = Server(Config(app=app, host=host, port=port))
    server.run()


def wallet_status(home: t.Optional[Path] = None) -> str:
    """Stored wallet state as formatted json."""
    wallet_app = SocialWalletApp(home=home)
    return json.dumps(wallet_app.wallet_manager.json, indent=2)


@group(name="social-wallet")
def _social_wallet() -> None:
    """Social wallet - guardian based recovery for a single owner wallet."""
    logger.info(f"Social wallet version: {__version__}")


@_social_wallet.command(name="daemon")
def _daemon(
    host: Annotated[str, params.String(help="HTTP server host string")] = DEFAULT_HOST,
    port: Annotated[int, params.Integer(help="HTTP server port")] = DEFAULT_PORT,
    home: Annotated[
        t.Optional[Path], params.Directory(long_flag="--home", help="Home directory")
    ] = None,
) -> None:
    """Launch social wallet daemon."""
    run_daemon(host=host, port=port, home=home)


@_social_wallet.command(name="status")
def _status(
    home: Annotated[
        t.Optional[Path], params.Directory(long_flag="--home", help="Home directory")
    ] = None,
) -> None:
    """Print the stored wallet state."""
    print(wallet_status(home=home))


def main() -> None:
    """CLI entry point."""
    run(cli=_social_wallet)


if __name__ == "__main__":
    main()
