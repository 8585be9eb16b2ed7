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

"""Constants."""

import os
from pathlib import Path


SOCIAL_WALLET = ".social_wallet"
SOCIAL_WALLET_HOME_ENV_VAR = "SOCIAL_WALLET_HOME"
SOCIAL_WALLET_HOME = Path(
    os.environ.get(SOCIAL_WALLET_HOME_ENV_VAR, Path.cwd() / SOCIAL_WALLET)
)

WALLET_JSON = "wallet.json"
WALLET_JSON_VERSION = 1

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8000
