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
"""Fixed mapping between gRPC status-kind names and numeric codes."""

import grpc

_NAME_TO_CODE = {
    "OK": 0,
    "CANCELLED": 1,
    "UNKNOWN": 2,
    "INVALID_ARGUMENT": 3,
    "DEADLINE_EXCEEDED": 4,
    "NOT_FOUND": 5,
    "ALREADY_EXISTS": 6,
    "PERMISSION_DENIED": 7,
    "RESOURCE_EXHAUSTED": 8,
    "FAILED_PRECONDITION": 9,
    "ABORTED": 10,
    "OUT_OF_RANGE": 11,
    "UNIMPLEMENTED": 12,
    "INTERNAL": 13,
    "UNAVAILABLE": 14,
    "DATA_LOSS": 15,
    "UNAUTHENTICATED": 16,
}

_CODE_TO_NAME = {code: name for name, code in _NAME_TO_CODE.items()}

STATUS_NAMES = tuple(_NAME_TO_CODE)


def is_known_name(name):
    return name in _NAME_TO_CODE


def code_for_name(name):
    try:
        return _NAME_TO_CODE[name]
    except KeyError:
        raise ValueError("Invalid status name %s" % name)


def name_for_code(code):
    try:
        return _CODE_TO_NAME[code]
    except KeyError:
        raise ValueError("Invalid status code %s" % code)


def status_code_value(code):
    """Returns the integer code of a grpc.StatusCode or of an int.

    Args:
      code: A grpc.StatusCode member or an integer status code.

    Returns:
      The integer status code.

    Raises:
      ValueError: If the code is neither a grpc.StatusCode nor an integer.
    """
    if isinstance(code, grpc.StatusCode):
        return code.value[0]
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    raise ValueError("Invalid status code %r" % (code,))
