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
"""Exceptions raised by gRPC status coverage."""


class Error(Exception):
    """Base class for all status coverage errors."""


class ConfigurationError(Error):
    """The coverage run was configured with missing or invalid values."""


class SchemaNotFoundError(ConfigurationError, FileNotFoundError):
    """The schema file to read declared statuses from does not exist."""


class SchemaError(Error):
    """The schema could not be compiled or lacks the requested service."""


class RecordWriteError(Error):
    """An outcome record could not be persisted."""


class RecordReadError(Error):
    """A persisted outcome record could not be read back."""


class PublishError(Error):
    """An external report publisher failed."""
