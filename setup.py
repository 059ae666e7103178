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
"""Setup module for gRPC Python's status coverage package."""

import os

import setuptools

_PACKAGE_PATH = os.path.realpath(os.path.dirname(__file__))
_README_PATH = os.path.join(_PACKAGE_PATH, "README.rst")

# Ensure we're in the proper directory whether or not we're being used by pip.
os.chdir(os.path.dirname(os.path.abspath(__file__)))

VERSION = "1.0.0"

CLASSIFIERS = [
    "Development Status :: 4 - Beta",
    "Framework :: Pytest",
    "Programming Language :: Python",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.9",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Topic :: Software Development :: Testing",
    "License :: OSI Approved :: Apache Software License",
]

INSTALL_REQUIRES = (
    "grpcio>=1.60.0",
    "grpcio-tools>=1.60.0",
    "protobuf>=4.22.0",
    "pytest>=7.0.0",
    "requests>=2.25.0",
    "tabulate>=0.8.0",
)

EXTRAS_REQUIRE = {
    "testing": ("nox>=2022.1.7",),
}

ENTRY_POINTS = {
    "pytest11": [
        "grpc_status_coverage = grpc_status_coverage.pytest_plugin",
    ],
}

setuptools.setup(
    name="grpcio-status-coverage",
    version=VERSION,
    description="Status code coverage of gRPC services under test",
    long_description=open(_README_PATH, "r").read(),
    long_description_content_type="text/x-rst",
    author="The gRPC Authors",
    author_email="grpc-io@googlegroups.com",
    url="https://grpc.io",
    license="Apache License 2.0",
    classifiers=CLASSIFIERS,
    packages=setuptools.find_packages(".", include=("grpc_status_coverage",)),
    python_requires=">=3.9",
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    entry_points=ENTRY_POINTS,
)
