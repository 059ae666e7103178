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
"""Configuration of a status coverage run."""

import base64
from dataclasses import dataclass
from dataclasses import field
import os
import tempfile
from typing import Mapping, Optional, Sequence, Tuple

from grpc_status_coverage import _errors

GRPC_STATUS_COVERAGE_TMP_DIR_ENV = "GRPC_STATUS_COVERAGE_TMP_DIR"
GRPC_STATUS_COVERAGE_LOG_DIR_ENV = "GRPC_STATUS_COVERAGE_LOG_DIR"
GRPC_STATUS_COVERAGE_FAIL_UNDER_ENV = "GRPC_STATUS_COVERAGE_FAIL_UNDER"

DEFAULT_EXTENSION_NAME = "tcg_platform.grpc.v1.spec"
DEFAULT_STATUS_FIELD = "status_codes"

ROOT_DIR_TOKEN = "<rootDir>"

_STORE_DIR_NAME = "grpc-status-coverage-tmp"
_LOGS_DIR_NAME = "logs"


@dataclass(frozen=True)
class CoverageTarget:
    package_name: str
    schema_path: str
    include_paths: Tuple[str, ...] = ()


@dataclass
class CoverageConfig:
    targets: Sequence[CoverageTarget]
    store_directory: str
    extension_name: str = DEFAULT_EXTENSION_NAME
    status_field: str = DEFAULT_STATUS_FIELD
    fail_under: Optional[int] = None
    include_paths: Tuple[str, ...] = field(default_factory=tuple)

    def validate(self) -> None:
        """Checks the configuration before any schema is read.

        Raises:
            ConfigurationError: If the configuration is incomplete.
        """
        if not self.targets:
            raise _errors.ConfigurationError(
                "At least one coverage target is required."
            )
        for target in self.targets:
            if not target.package_name or not target.schema_path:
                raise _errors.ConfigurationError(
                    "Both package_name and schema_path are required, got %r."
                    % (target,)
                )
        if not self.store_directory:
            raise _errors.ConfigurationError("store_directory is required.")
        if self.fail_under is not None and not 0 <= self.fail_under <= 100:
            raise _errors.ConfigurationError(
                "fail_under must be between 0 and 100, got %r."
                % self.fail_under
            )


def normalize_extension_name(name: str) -> str:
    """Strips the option syntax parentheses from an extension name."""
    name = name.strip()
    if name.startswith("(") and name.endswith(")"):
        name = name[1:-1]
    return name.lstrip(".")


def resolve_schema_path(schema_path: str, root_dir: str) -> str:
    if schema_path.startswith(ROOT_DIR_TOKEN):
        relative = schema_path[len(ROOT_DIR_TOKEN) :].lstrip("/\\")
        return os.path.join(root_dir, relative)
    return schema_path


def parse_target(line: str) -> CoverageTarget:
    """Parses a "package=path" target line.

    Raises:
        ConfigurationError: If the line is not of the expected form.
    """
    package_name, sep, schema_path = line.partition("=")
    if not sep or not package_name.strip() or not schema_path.strip():
        raise _errors.ConfigurationError(
            "Expected a target of the form package=path, got %r." % line
        )
    return CoverageTarget(package_name.strip(), schema_path.strip())


def default_store_directory(
    environ: Optional[Mapping[str, str]] = None, cwd: Optional[str] = None
) -> str:
    """Returns the record store directory for the current project.

    An explicit GRPC_STATUS_COVERAGE_LOG_DIR wins. Otherwise the directory is
    derived from GRPC_STATUS_COVERAGE_TMP_DIR (or the system temporary
    directory) and the working directory, so every process of one run lands on
    the same store while separate projects never share one.
    """
    environ = os.environ if environ is None else environ
    explicit = environ.get(GRPC_STATUS_COVERAGE_LOG_DIR_ENV)
    if explicit:
        return os.path.abspath(explicit)
    base = environ.get(GRPC_STATUS_COVERAGE_TMP_DIR_ENV)
    if not base:
        base = tempfile.gettempdir()
    cwd = os.getcwd() if cwd is None else cwd
    project_key = base64.urlsafe_b64encode(cwd.encode("utf-8")).decode("ascii")
    return os.path.abspath(
        os.path.join(base, project_key, _STORE_DIR_NAME, _LOGS_DIR_NAME)
    )


def fail_under_from_env(
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[int]:
    """Reads the coverage threshold from the environment, if any.

    Raises:
        ConfigurationError: If the value is not an integer.
    """
    environ = os.environ if environ is None else environ
    value = environ.get(GRPC_STATUS_COVERAGE_FAIL_UNDER_ENV)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise _errors.ConfigurationError(
            "%s must be an integer, got %r."
            % (GRPC_STATUS_COVERAGE_FAIL_UNDER_ENV, value)
        )
