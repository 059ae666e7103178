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
"""Tests of a complete status coverage run."""

import io
import logging
import os
import shutil
import tempfile
import unittest

import grpc

from grpc_status_coverage import _config
from grpc_status_coverage import _coverage
from grpc_status_coverage import _errors
from grpc_status_coverage import _reporter
from tests.status_coverage import _protos


class _RecordingPublisher(object):

    def __init__(self):
        self.results = []

    def publish(self, result):
        self.results.append(result)
        return True


class _FailingPublisher(object):

    def publish(self, result):
        raise _errors.PublishError("GitHub is down")


class CoverageReporterTest(unittest.TestCase):

    def setUp(self):
        self._directory = tempfile.mkdtemp()
        self._schema_path = _protos.write_schemas(self._directory)
        self._config = _config.CoverageConfig(
            targets=[
                _config.CoverageTarget(_protos.SERVICE_NAME, self._schema_path)
            ],
            store_directory=os.path.join(self._directory, "store", "logs"),
        )
        self._stream = io.StringIO()

    def tearDown(self):
        shutil.rmtree(self._directory)

    def _reporter(self, **kwargs):
        return _reporter.CoverageReporter(
            self._config, stream=self._stream, **kwargs
        )

    def test_run(self):
        reporter = self._reporter()
        reporter.start()
        recorder = reporter.recorder()
        recorder.record(
            "/users.v1.UserService/GetUser", grpc.StatusCode.OK
        )
        recorder.record(
            "/users.v1.UserService/GetUser", grpc.StatusCode.OK
        )

        result = reporter.finish()

        self.assertEqual({_protos.SERVICE_NAME}, set(result))
        methods = result[_protos.SERVICE_NAME]
        self.assertEqual({"GetUser", "DeleteUser"}, set(methods))
        self.assertEqual(
            _coverage.CoverageEntry(
                expected=("OK", "NOT_FOUND"),
                unchecked=("NOT_FOUND",),
                coverage_percent=50,
            ),
            methods["GetUser"],
        )
        self.assertEqual(0, methods["DeleteUser"].coverage_percent)
        self.assertEqual(
            methods["DeleteUser"].expected, methods["DeleteUser"].unchecked
        )
        self.assertFalse(reporter.store.exists())
        output = self._stream.getvalue()
        self.assertIn("GetUser", output)
        self.assertIn("50%", output)

    def test_run_without_any_call(self):
        reporter = self._reporter()

        result = reporter.finish(print_table=False)

        for entry in result[_protos.SERVICE_NAME].values():
            self.assertEqual(0, entry.coverage_percent)
            self.assertEqual(entry.expected, entry.unchecked)
        self.assertEqual("", self._stream.getvalue())

    def test_reporter_can_run_again(self):
        reporter = self._reporter()
        reporter.start()
        reporter.recorder().record(
            "/users.v1.UserService/GetUser", grpc.StatusCode.NOT_FOUND
        )
        first = reporter.finish(print_table=False)

        reporter.start()
        second = reporter.finish(print_table=False)

        self.assertEqual(
            50, first[_protos.SERVICE_NAME]["GetUser"].coverage_percent
        )
        self.assertEqual(
            0, second[_protos.SERVICE_NAME]["GetUser"].coverage_percent
        )

    def test_start_discards_stale_records(self):
        reporter = self._reporter()
        reporter.store.create()
        reporter.recorder().record(
            "/users.v1.UserService/GetUser", grpc.StatusCode.NOT_FOUND
        )

        reporter.start()
        reporter.recorder().record(
            "/users.v1.UserService/GetUser", grpc.StatusCode.OK
        )
        result = reporter.finish(print_table=False)

        self.assertEqual(
            ("NOT_FOUND",),
            result[_protos.SERVICE_NAME]["GetUser"].unchecked,
        )

    def test_publishers_receive_result(self):
        publisher = _RecordingPublisher()
        reporter = self._reporter(publishers=[publisher])
        reporter.start()

        result = reporter.finish(print_table=False)

        self.assertEqual([result], publisher.results)

    def test_publisher_failure_is_contained(self):
        publisher = _RecordingPublisher()
        reporter = self._reporter(
            publishers=[_FailingPublisher(), publisher]
        )
        reporter.start()
        reporter.recorder().record(
            "/users.v1.UserService/DeleteUser", grpc.StatusCode.OK
        )

        with self.assertLogs(_reporter.__name__, level="ERROR"):
            result = reporter.finish(print_table=False)

        self.assertEqual(
            33, result[_protos.SERVICE_NAME]["DeleteUser"].coverage_percent
        )
        self.assertEqual([result], publisher.results)

    def test_below_threshold(self):
        self._config.fail_under = 50
        reporter = self._reporter()
        reporter.start()
        reporter.recorder().record(
            "/users.v1.UserService/GetUser", grpc.StatusCode.OK
        )

        result = reporter.finish(print_table=False)

        self.assertEqual(
            [
                (
                    _protos.SERVICE_NAME,
                    "DeleteUser",
                    result[_protos.SERVICE_NAME]["DeleteUser"],
                )
            ],
            reporter.below_threshold(result),
        )

    def test_no_threshold(self):
        reporter = self._reporter()

        self.assertEqual([], reporter.below_threshold(reporter.compute()))

    def test_setup_errors_abort(self):
        self._config.targets = []
        with self.assertRaises(_errors.ConfigurationError):
            self._reporter()

        self._config.targets = [
            _config.CoverageTarget(
                _protos.SERVICE_NAME,
                os.path.join(self._directory, "missing.proto"),
            )
        ]
        with self.assertRaises(_errors.SchemaNotFoundError):
            self._reporter()

        self._config.targets = [
            _config.CoverageTarget("users.v1.Missing", self._schema_path)
        ]
        with self.assertRaises(_errors.SchemaError):
            self._reporter()


if __name__ == "__main__":
    logging.basicConfig()
    unittest.main(verbosity=2)
