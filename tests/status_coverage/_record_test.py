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
"""Tests of the outcome record store."""

from concurrent import futures
import json
import logging
import os
import shutil
import tempfile
import threading
import unittest

from grpc_status_coverage import _errors
from grpc_status_coverage import _record

_RECORD = _record.OutcomeRecord(
    package_name="users.v1.UserService",
    method_name="GetUser",
    status_code=5,
    timestamp=1700000000000,
)

_THREAD_COUNT = 16
_WRITES_PER_THREAD = 25


class OutcomeRecordTest(unittest.TestCase):

    def test_persisted_format(self):
        self.assertEqual(
            {
                "package_name": "users.v1.UserService",
                "method_name": "GetUser",
                "status_code": 5,
                "timestamp": 1700000000000,
            },
            json.loads(_RECORD.to_json()),
        )

    def test_from_json(self):
        self.assertEqual(
            _RECORD, _record.OutcomeRecord.from_json(_RECORD.to_json())
        )

    def test_from_json_rejects_invalid_records(self):
        invalid = (
            "[]",
            "{}",
            '{"package_name": "p", "method_name": "m", "status_code": "5",'
            ' "timestamp": 1}',
            '{"package_name": "p", "method_name": "m", "status_code": true,'
            ' "timestamp": 1}',
            '{"package_name": "p", "method_name": "m", "status_code": 5}',
            "not json",
        )
        for text in invalid:
            with self.assertRaises(ValueError):
                _record.OutcomeRecord.from_json(text)


class RecordStoreTest(unittest.TestCase):

    def setUp(self):
        self._directory = tempfile.mkdtemp()
        self._store = _record.RecordStore(
            os.path.join(self._directory, "logs")
        )

    def tearDown(self):
        shutil.rmtree(self._directory)

    def test_create_and_destroy(self):
        self.assertFalse(self._store.exists())
        self._store.create()
        self._store.create()
        self.assertTrue(self._store.exists())
        self._store.destroy()
        self.assertFalse(self._store.exists())
        self._store.destroy()

    def test_write_then_read(self):
        self._store.create()

        path = self._store.write(_RECORD)

        self.assertEqual([path], self._store.record_paths())
        self.assertEqual(_RECORD, self._store.read(path))

    def test_each_write_gets_its_own_file(self):
        self._store.create()

        paths = {self._store.write(_RECORD) for _ in range(10)}

        self.assertEqual(10, len(paths))
        self.assertEqual(sorted(paths), self._store.record_paths())

    def test_concurrent_writes_are_never_lost(self):
        self._store.create()
        barrier = threading.Barrier(_THREAD_COUNT)

        def write_records(thread_index):
            barrier.wait()
            for index in range(_WRITES_PER_THREAD):
                self._store.write(
                    _RECORD._replace(
                        timestamp=thread_index * _WRITES_PER_THREAD + index
                    )
                )

        with futures.ThreadPoolExecutor(max_workers=_THREAD_COUNT) as pool:
            list(pool.map(write_records, range(_THREAD_COUNT)))

        paths = self._store.record_paths()
        self.assertEqual(_THREAD_COUNT * _WRITES_PER_THREAD, len(paths))
        timestamps = {self._store.read(path).timestamp for path in paths}
        self.assertEqual(
            set(range(_THREAD_COUNT * _WRITES_PER_THREAD)), timestamps
        )

    def test_write_without_store(self):
        with self.assertRaises(_errors.RecordWriteError):
            self._store.write(_RECORD)

    def test_pending_files_are_not_listed(self):
        self._store.create()
        with open(os.path.join(self._store.directory, "x.tmp"), "w") as f:
            f.write("{")

        self.assertEqual([], self._store.record_paths())

    def test_record_paths_of_missing_store(self):
        self.assertEqual([], self._store.record_paths())

    def test_read_corrupt_record(self):
        self._store.create()
        path = os.path.join(self._store.directory, "corrupt.json")
        with open(path, "w") as f:
            f.write('{"package_name": ')

        with self.assertRaises(_errors.RecordReadError):
            self._store.read(path)

    def test_read_missing_record(self):
        with self.assertRaises(_errors.RecordReadError):
            self._store.read(os.path.join(self._directory, "missing.json"))


if __name__ == "__main__":
    logging.basicConfig()
    unittest.main(verbosity=2)
