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

"""Local resource representation."""

import json
import os
import platform
import shutil
import time
import typing as t
from pathlib import Path

from social_wallet.serialization import deserialize, serialize


N_BACKUPS = 5


def _safe_file_operation(operation: t.Callable, *args: t.Any, **kwargs: t.Any) -> None:
    """Perform a file operation, retrying on Windows where handles linger."""
    max_retries = 3 if platform.system() == "Windows" else 1

    for attempt in range(max_retries):
        try:
            operation(*args, **kwargs)
            return
        except OSError:
            if attempt == max_retries - 1:
                raise
            time.sleep(0.1)


class LocalResource:
    """Resource persisted as a JSON file."""

    _file: t.Optional[str] = None

    def __init__(self, path: t.Optional[Path] = None) -> None:
        """Initialize local resource."""
        self.path = path

    @property
    def json(self) -> t.Dict:
        """To dictionary object."""
        obj = {}
        for pname in type(self).__annotations__:
            if pname.startswith("_") or pname == "path":
                continue
            obj[pname] = serialize(self.__dict__[pname])
        return obj

    @classmethod
    def from_json(cls, obj: t.Dict) -> "LocalResource":
        """Load LocalResource from json."""
        kwargs = {}
        for pname, ptype in cls.__annotations__.items():
            if pname.startswith("_") or pname not in obj:
                continue
            kwargs[pname] = deserialize(obj=obj[pname], otype=ptype)
        return cls(**kwargs)

    @classmethod
    def load(cls, path: Path) -> "LocalResource":
        """Load local resource."""
        file = (
            path / cls._file
            if cls._file is not None and path.name != cls._file
            else path
        )
        data = json.loads(file.read_text(encoding="utf-8"))
        return cls.from_json(obj={**data, "path": path})

    def store(self) -> None:
        """Store local resource."""
        if self.path is None:
            raise RuntimeError(f"Cannot save {self}; Path value not provided.")

        path = self.path
        if self._file is not None and path.name != self._file:
            path = path / self._file

        tmp_path = path.parent / f".{path.name}.tmp"
        if tmp_path.exists():
            _safe_file_operation(tmp_path.unlink)

        tmp_path.write_text(json.dumps(self.json, indent=2), encoding="utf-8")
        _safe_file_operation(os.replace, tmp_path, path)

        self.load(self.path)  # Validate before making backup

        for i in reversed(range(N_BACKUPS - 1)):
            newer = path.with_name(f"{path.name}.{i}.bak")
            older = path.with_name(f"{path.name}.{i + 1}.bak")
            if newer.exists():
                if older.exists():
                    _safe_file_operation(older.unlink)
                _safe_file_operation(newer.rename, older)

        _safe_file_operation(shutil.copy2, path, path.with_name(f"{path.name}.0.bak"))
