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
"""Folds persisted outcome records into the statuses observed per method."""

import logging
from typing import Dict, Iterable, Set

from grpc_status_coverage import _errors
from grpc_status_coverage import _record

_LOGGER = logging.getLogger(__name__)

# package name -> method name -> distinct status codes observed.
ObservedMap = Dict[str, Dict[str, Set[int]]]


def aggregate(records: Iterable[_record.OutcomeRecord]) -> ObservedMap:
    observed: ObservedMap = {}
    for record in records:
        methods = observed.setdefault(record.package_name, {})
        methods.setdefault(record.method_name, set()).add(record.status_code)
    return observed


def _readable_records(store):
    for path in store.record_paths():
        try:
            yield store.read(path)
        except _errors.RecordReadError as e:
            _LOGGER.warning("Skipping outcome record: %s", e)


def read_observed(store: _record.RecordStore) -> ObservedMap:
    """Aggregates every record persisted in a store.

    A store that was never created means no RPC was recorded and yields an
    empty map. Records that cannot be read are skipped with a warning.
    """
    if not store.exists():
        _LOGGER.info("Record store %s does not exist.", store.directory)
        return {}
    return aggregate(_readable_records(store))


def observed_codes(observed: ObservedMap, package_name, method_name):
    return observed.get(package_name, {}).get(method_name, set())
