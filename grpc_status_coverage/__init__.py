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
"""gRPC Python status coverage.

Measures, per RPC method, which of the statuses declared in the service
schema a test suite actually observed.
"""

from grpc_status_coverage._aggregate import ObservedMap
from grpc_status_coverage._aggregate import aggregate
from grpc_status_coverage._aggregate import read_observed
from grpc_status_coverage._config import CoverageConfig
from grpc_status_coverage._config import CoverageTarget
from grpc_status_coverage._config import default_store_directory
from grpc_status_coverage._coverage import CoverageEntry
from grpc_status_coverage._coverage import CoverageResult
from grpc_status_coverage._coverage import compute_coverage
from grpc_status_coverage._coverage import methods_below
from grpc_status_coverage._errors import ConfigurationError
from grpc_status_coverage._errors import Error
from grpc_status_coverage._errors import PublishError
from grpc_status_coverage._errors import RecordReadError
from grpc_status_coverage._errors import RecordWriteError
from grpc_status_coverage._errors import SchemaError
from grpc_status_coverage._errors import SchemaNotFoundError
from grpc_status_coverage._github import GitHubCommentPublisher
from grpc_status_coverage._interceptor import AioStatusCoverageInterceptor
from grpc_status_coverage._interceptor import OutcomeRecorder
from grpc_status_coverage._interceptor import StatusCoverageInterceptor
from grpc_status_coverage._interceptor import intercept_channel
from grpc_status_coverage._record import OutcomeRecord
from grpc_status_coverage._record import RecordStore
from grpc_status_coverage._report import format_markdown
from grpc_status_coverage._report import format_table
from grpc_status_coverage._reporter import CoverageReporter
from grpc_status_coverage._spec import MethodSpec
from grpc_status_coverage._spec import ServiceSpec
from grpc_status_coverage._spec import load_service_spec
from grpc_status_coverage._spec import load_service_specs

__all__ = (
    "AioStatusCoverageInterceptor",
    "ConfigurationError",
    "CoverageConfig",
    "CoverageEntry",
    "CoverageReporter",
    "CoverageResult",
    "CoverageTarget",
    "Error",
    "GitHubCommentPublisher",
    "MethodSpec",
    "ObservedMap",
    "OutcomeRecord",
    "OutcomeRecorder",
    "PublishError",
    "RecordReadError",
    "RecordStore",
    "RecordWriteError",
    "SchemaError",
    "SchemaNotFoundError",
    "ServiceSpec",
    "StatusCoverageInterceptor",
    "aggregate",
    "compute_coverage",
    "default_store_directory",
    "format_markdown",
    "format_table",
    "intercept_channel",
    "load_service_spec",
    "load_service_specs",
    "methods_below",
    "read_observed",
)
