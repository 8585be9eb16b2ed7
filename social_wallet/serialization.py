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

"""Serialization utilities."""

import types
import typing as t
from dataclasses import asdict, is_dataclass
from pathlib import Path


def serialize(obj: t.Any) -> t.Any:  # pylint: disable=too-many-return-statements
    """Serialize object."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return serialize(asdict(obj))
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, dict):
        return {serialize(key): serialize(obj=value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [serialize(obj=value) for value in obj]
    return obj


def deserialize(  # pylint: disable=too-many-return-statements
    obj: t.Any, otype: t.Any
) -> t.Any:
    """Deserialize a json object."""

    origin = getattr(otype, "__origin__", None)

    # Handle Union and Optional
    if origin is t.Union or isinstance(otype, types.UnionType):
        for arg in t.get_args(otype):
            if arg is type(None):  # noqa: E721
                continue
            try:
                return deserialize(obj, arg)
            except Exception:  # pylint: disable=broad-except  # nosec
                continue
        return None

    base = getattr(otype, "__class__")  # noqa: B009
    if base.__name__ == "_GenericAlias":  # type: ignore
        args = otype.__args__  # type: ignore
        if len(args) == 1:
            (atype,) = args
            return [deserialize(arg, atype) for arg in obj]
        if len(args) == 2:
            (ktype, vtype) = args
            return {
                deserialize(key, ktype): deserialize(val, vtype)
                for key, val in obj.items()
            }
        return obj
    if otype is Path:
        return Path(obj)
    if is_dataclass(otype) and hasattr(otype, "from_json"):
        return otype.from_json(obj)
    # JSON object keys are always strings
    if otype is int:
        return int(obj)
    return obj
