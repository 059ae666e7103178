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
"""pytest integration: measures status coverage of the RPCs a session makes.

Enable it by listing the services to measure in the pytest configuration::

    [pytest]
    status_coverage_targets =
        helloworld.Greeter=<rootDir>/protos/helloworld.proto

and routing test RPCs through the status_coverage_interceptor fixture.
"""

import os

import pytest

from grpc_status_coverage import _config
from grpc_status_coverage import _errors
from grpc_status_coverage import _github
from grpc_status_coverage import _interceptor
from grpc_status_coverage import _record
from grpc_status_coverage import _report
from grpc_status_coverage import _reporter

_REPORTER_KEY = pytest.StashKey()
_RESULT_KEY = pytest.StashKey()
_PREVIOUS_LOG_DIR_KEY = pytest.StashKey()


def pytest_addoption(parser):
    group = parser.getgroup("status-coverage", "gRPC status coverage")
    group.addoption(
        "--no-status-coverage",
        action="store_true",
        default=False,
        help="Disable gRPC status coverage measurement.",
    )
    group.addoption(
        "--status-coverage-fail-under",
        type=int,
        default=None,
        help="Fail the session if any method's status coverage is below"
        " this percentage.",
    )
    parser.addini(
        "status_coverage_targets",
        type="linelist",
        default=[],
        help="Services to measure, one 'package=path/to/schema.proto' per"
        " line. A leading <rootDir> is replaced by the pytest root directory.",
    )
    parser.addini(
        "status_coverage_extension",
        default=_config.DEFAULT_EXTENSION_NAME,
        help="Method option extension declaring the expected statuses.",
    )
    parser.addini(
        "status_coverage_status_field",
        default=_config.DEFAULT_STATUS_FIELD,
        help="Repeated field of the extension listing the status names.",
    )
    parser.addini(
        "status_coverage_fail_under",
        default="",
        help="Minimum status coverage percentage of every method.",
    )
    parser.addini(
        "status_coverage_github_comment",
        type="bool",
        default=True,
        help="Comment the coverage table on the pull request when running"
        " in GitHub Actions.",
    )


def _is_worker(config):
    return hasattr(config, "workerinput")


def _fail_under(config):
    value = config.getoption("status_coverage_fail_under")
    if value is not None:
        return value
    ini_value = config.getini("status_coverage_fail_under")
    if ini_value:
        try:
            return int(ini_value)
        except ValueError:
            raise _errors.ConfigurationError(
                "status_coverage_fail_under must be an integer, got %r."
                % ini_value
            )
    return _config.fail_under_from_env()


def _load_config(config):
    targets = []
    for line in config.getini("status_coverage_targets"):
        target = _config.parse_target(line)
        targets.append(
            _config.CoverageTarget(
                target.package_name,
                _config.resolve_schema_path(
                    target.schema_path, str(config.rootpath)
                ),
            )
        )
    return _config.CoverageConfig(
        targets=targets,
        store_directory=_config.default_store_directory(),
        extension_name=config.getini("status_coverage_extension"),
        status_field=config.getini("status_coverage_status_field"),
        fail_under=_fail_under(config),
    )


def pytest_configure(config):
    if config.getoption("no_status_coverage") or _is_worker(config):
        return
    if not config.getini("status_coverage_targets"):
        return
    try:
        coverage_config = _load_config(config)
        publishers = []
        if config.getini("status_coverage_github_comment"):
            publishers.append(_github.GitHubCommentPublisher())
        reporter = _reporter.CoverageReporter(
            coverage_config, publishers=publishers
        )
    except _errors.Error as e:
        raise pytest.UsageError("gRPC status coverage: %s" % e) from e
    reporter.start()
    config.stash[_PREVIOUS_LOG_DIR_KEY] = os.environ.get(
        _config.GRPC_STATUS_COVERAGE_LOG_DIR_ENV
    )
    # Worker processes inherit the store location through the environment.
    os.environ[_config.GRPC_STATUS_COVERAGE_LOG_DIR_ENV] = (
        coverage_config.store_directory
    )
    config.stash[_REPORTER_KEY] = reporter


def pytest_unconfigure(config):
    if _PREVIOUS_LOG_DIR_KEY not in config.stash:
        return
    previous = config.stash[_PREVIOUS_LOG_DIR_KEY]
    if previous is None:
        os.environ.pop(_config.GRPC_STATUS_COVERAGE_LOG_DIR_ENV, None)
    else:
        os.environ[_config.GRPC_STATUS_COVERAGE_LOG_DIR_ENV] = previous


@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session, exitstatus):
    reporter = session.config.stash.get(_REPORTER_KEY, None)
    if reporter is None:
        return
    result = reporter.finish(print_table=False)
    session.config.stash[_RESULT_KEY] = result
    if reporter.below_threshold(result) and exitstatus == pytest.ExitCode.OK:
        session.exitstatus = pytest.ExitCode.TESTS_FAILED


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    result = config.stash.get(_RESULT_KEY, None)
    if result is None:
        return
    terminalreporter.section("gRPC status coverage")
    terminalreporter.write_line(
        _report.format_table(result, color=terminalreporter.hasmarkup)
    )
    reporter = config.stash[_REPORTER_KEY]
    for package_name, method_name, entry in reporter.below_threshold(result):
        terminalreporter.write_line(
            "%s/%s: status coverage %d%% is below %d%%"
            % (
                package_name,
                method_name,
                entry.coverage_percent,
                reporter.config.fail_under,
            ),
            red=True,
        )


def _active_store_directory(config):
    if config.getoption("no_status_coverage"):
        return None
    reporter = config.stash.get(_REPORTER_KEY, None)
    if reporter is not None:
        return reporter.store.directory
    if _is_worker(config):
        return os.environ.get(_config.GRPC_STATUS_COVERAGE_LOG_DIR_ENV)
    return None


@pytest.fixture(scope="session")
def status_coverage_recorder(pytestconfig):
    """An OutcomeRecorder writing to the store of the current session.

    Without an active coverage run the recorder persists nothing.
    """
    directory = _active_store_directory(pytestconfig)
    if directory is None:
        return _interceptor.OutcomeRecorder(None)
    return _interceptor.OutcomeRecorder(_record.RecordStore(directory))


@pytest.fixture(scope="session")
def status_coverage_interceptor(status_coverage_recorder):
    """A client interceptor recording the status of every RPC."""
    return _interceptor.StatusCoverageInterceptor(status_coverage_recorder)


@pytest.fixture
def status_coverage_aio_interceptor(status_coverage_recorder):
    """Interceptors for grpc.aio channels recording the status of every RPC.

    Pass its ``interceptors`` to the channel. Statuses still pending when the
    test ends are drained during teardown.
    """
    coverage = _interceptor.AioStatusCoverageInterceptor(
        status_coverage_recorder
    )
    yield coverage
    coverage.drain()
