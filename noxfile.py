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
"""Provides nox sessions for developing gRPC Python status coverage."""

import nox

TESTS_DIR = "tests"


@nox.session
def tests(session: nox.Session):
    """Session to install the package and run its unit tests."""
    session.install("-e", ".[testing]")
    session.run(
        "python",
        "-m",
        "unittest",
        "discover",
        "-s",
        TESTS_DIR,
        "-t",
        ".",
        "-p",
        "_*_test.py",
        "-v",
    )


@nox.session
def pytest(session: nox.Session):
    """Session to run the unit tests under pytest, through the plugin."""
    session.install("-e", ".[testing]")
    session.run("pytest", TESTS_DIR, *session.posargs)
