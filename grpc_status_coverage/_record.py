# Copyright 2026 gRPC authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Persistence of call outcomes, one file per completed RPC."""

import collections
import json
import os
import shutil
import uuid

from grpc_status_coverage import _errors

_RECORD_SUFFIX = ".json"
_PENDING_SUFFIX = ".tmp"

_RECORD_FIELDS = (
    ("package_name", str),
    ("method_name", str),
    ("status_code", int),
    ("timestamp", int),
)


class OutcomeRecord(
    collections.namedtuple(
        "OutcomeRecord",
        ("package_name", "method_name", "status_code", "timestamp"),
    )
):
    """The terminal status of one completed RPC."""

    def to_json(self):
        return json.dumps(self._asdict(), sort_keys=True)

    @classmethod
    def from_json(cls, text):
        """Parses a persisted record.

        Raises:
          ValueError: If the text is not a JSON object with the record fields.
        """
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("Record is not a JSON object.")
        values = []
        for name, kind in _RECORD_FIELDS:
            if name not in data:
                raise ValueError("Record is missing field %s." % name)
            value = data[name]
            if not isinstance(value, kind) or isinstance(value, bool):
                raise ValueError(
                    "Record field %s must be of type %s, got %r."
                    % (name, kind.__name__, value)
                )
            values.append(value)
        return cls(*values)


class RecordStore(object):
    """A directory holding one immutable file per outcome record.

    Every record gets its own file whose name combines the writer's process id
    with a random UUID, so concurrent writers in any number of threads or
    processes never target the same file. Records are written under a pending
    name and renamed into place, so readers only ever see complete records.
    """

    def __init__(self, directory):
        self._directory = os.path.abspath(directory)

    @property
    def directory(self):
        return self._directory

    def __repr__(self):
        return "RecordStore(%r)" % self._directory

    def exists(self):
        return os.path.isdir(self._directory)

    def create(self):
        os.makedirs(self._directory, exist_ok=True)

    def destroy(self):
        shutil.rmtree(self._directory, ignore_errors=True)

    def _new_record_name(self):
        return "%d-%s" % (os.getpid(), uuid.uuid4().hex)

    def write(self, record):
        """Persists a record and returns the path of its file.

        Raises:
          RecordWriteError: If the record could not be written.
        """
        name = self._new_record_name()
        pending_path = os.path.join(self._directory, name + _PENDING_SUFFIX)
        path = os.path.join(self._directory, name + _RECORD_SUFFIX)
        try:
            with open(pending_path, "x", encoding="utf-8") as f:
                f.write(record.to_json())
            os.replace(pending_path, path)
        except OSError as e:
            try:
                os.remove(pending_path)
            except OSError:
                pass
            raise _errors.RecordWriteError(
                "Failed to write outcome record to %s: %s" % (path, e)
            ) from e
        return path

    def record_paths(self):
        """Returns the paths of all published records, sorted by name."""
        try:
            names = os.listdir(self._directory)
        except FileNotFoundError:
            return []
        return [
            os.path.join(self._directory, name)
            for name in sorted(names)
            if name.endswith(_RECORD_SUFFIX)
        ]

    def read(self, path):
        """Reads one record.

        Raises:
          RecordReadError: If the file is unreadable or not a valid record.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                return OutcomeRecord.from_json(f.read())
        except (OSError, ValueError) as e:
            raise _errors.RecordReadError(
                "Failed to read outcome record %s: %s" % (path, e)
            ) from e
