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
"""Drives one status coverage run from setup to report."""

import logging
import sys

from grpc_status_coverage import _aggregate
from grpc_status_coverage import _coverage
from grpc_status_coverage import _interceptor
from grpc_status_coverage import _record
from grpc_status_coverage import _report
from grpc_status_coverage import _spec

_LOGGER = logging.getLogger(__name__)


class CoverageReporter(object):
    """Measures how many declared statuses a test run observed.

    Schemas are read when the reporter is constructed, so configuration and
    schema errors abort before any test runs. Between start() and finish()
    any number of threads or processes may record outcomes into the store.
    """

    def __init__(self, config, publishers=(), stream=None):
        config.validate()
        self._config = config
        self._publishers = tuple(publishers)
        self._stream = stream
        self._store = _record.RecordStore(config.store_directory)
        self._specs = _spec.load_service_specs(
            config.targets,
            extension_name=config.extension_name,
            status_field=config.status_field,
            include_paths=config.include_paths,
        )

    @property
    def config(self):
        return self._config

    @property
    def specs(self):
        return self._specs

    @property
    def store(self):
        return self._store

    def start(self):
        """Starts a run with an empty record store."""
        self._store.destroy()
        self._store.create()

    def recorder(self):
        return _interceptor.OutcomeRecorder(self._store)

    def _print(self, result):
        stream = sys.stdout if self._stream is None else self._stream
        color = hasattr(stream, "isatty") and stream.isatty()
        stream.write(_report.format_table(result, color=color) + "\n")
        stream.flush()

    def _publish(self, result):
        for publisher in self._publishers:
            try:
                publisher.publish(result)
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception(
                    "Publisher %r failed; coverage is unaffected.", publisher
                )

    def compute(self):
        """Computes coverage from the records persisted so far."""
        observed = _aggregate.read_observed(self._store)
        return _coverage.compute_coverage(self._specs, observed)

    def finish(self, print_table=True):
        """Completes the run.

        Must only be called once every recorder of the run is done.

        Args:
          print_table: Whether to write the coverage table to the stream.

        Returns:
          The CoverageResult of the run.
        """
        try:
            result = self.compute()
        finally:
            self._store.destroy()
        if print_table:
            self._print(result)
        self._publish(result)
        return result

    def below_threshold(self, result):
        if self._config.fail_under is None:
            return []
        return _coverage.methods_below(result, self._config.fail_under)
