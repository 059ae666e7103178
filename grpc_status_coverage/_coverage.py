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
"""Computes the share of declared statuses that were observed."""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Tuple

from grpc_status_coverage import _aggregate
from grpc_status_coverage import _spec
from grpc_status_coverage import _status

# package name -> method name -> CoverageEntry.
CoverageResult = Dict[str, Dict[str, "CoverageEntry"]]


@dataclass(frozen=True)
class CoverageEntry:
    """Coverage of the declared status surface of one method.

    Attributes:
      expected: The declared status-kind names, in declaration order.
      unchecked: The declared names never observed, in declaration order.
      coverage_percent: Integer percentage of expected names observed.
    """

    expected: Tuple[str, ...]
    unchecked: Tuple[str, ...]
    coverage_percent: int

    @property
    def checked(self) -> Tuple[str, ...]:
        unchecked = set(self.unchecked)
        return tuple(name for name in self.expected if name not in unchecked)


def _is_checked(name, codes):
    if not _status.is_known_name(name):
        return False
    return _status.code_for_name(name) in codes


def _percent(checked_count, expected_count):
    # Rounds half up, as Math.round does for the non-negative values here.
    return (200 * checked_count + expected_count) // (2 * expected_count)


def compute_entry(expected, codes) -> CoverageEntry:
    expected = tuple(expected)
    unchecked = tuple(name for name in expected if not _is_checked(name, codes))
    return CoverageEntry(
        expected=expected,
        unchecked=unchecked,
        coverage_percent=_percent(
            len(expected) - len(unchecked), len(expected)
        ),
    )


def compute_coverage(
    specs: Mapping[str, _spec.ServiceSpec],
    observed: _aggregate.ObservedMap,
) -> CoverageResult:
    """Computes a CoverageEntry for every declared method.

    Methods declaring no status at all are left out of the result.

    Args:
      specs: ServiceSpecs keyed by package name.
      observed: The statuses observed per package and method.

    Returns:
      A mapping from package name to a mapping from method name to
      CoverageEntry.
    """
    result: CoverageResult = {}
    for package_name, service_spec in specs.items():
        entries = {}
        for method_name, method_spec in service_spec.methods.items():
            if not method_spec.expected_statuses:
                continue
            codes = _aggregate.observed_codes(
                observed, package_name, method_name
            )
            entries[method_name] = compute_entry(
                method_spec.expected_statuses, codes
            )
        result[package_name] = entries
    return result


def methods_below(
    result: CoverageResult, threshold: int
) -> List[Tuple[str, str, CoverageEntry]]:
    """Returns the methods whose coverage is below threshold."""
    return [
        (package_name, method_name, entry)
        for package_name, methods in result.items()
        for method_name, entry in methods.items()
        if entry.coverage_percent < threshold
    ]
