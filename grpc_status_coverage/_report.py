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
"""Renders coverage results for people."""

import tabulate

_HEADERS = ["Package", "Method", "Coverage", "Unchecked Status"]

_COLORS = {
    "red": [31, 0],
    "green": [32, 0],
}


def _colorize(text, color):
    return "\x1b[%d;%dm%s\x1b[0m" % (_COLORS[color][1], _COLORS[color][0], text)


def _rows(result, color):
    rows = []
    for package_name, methods in result.items():
        for method_name, entry in methods.items():
            coverage = "%d%%" % entry.coverage_percent
            unchecked = ", ".join(entry.unchecked)
            if color:
                tag = "green" if entry.coverage_percent == 100 else "red"
                method_name = _colorize(method_name, tag)
                coverage = _colorize(coverage, tag)
                if unchecked:
                    unchecked = _colorize(unchecked, "red")
            rows.append([package_name, method_name, coverage, unchecked])
    return rows


def format_table(result, color=False):
    return tabulate.tabulate(
        _rows(result, color), headers=_HEADERS, tablefmt="grid"
    )


def format_markdown(result):
    return tabulate.tabulate(
        _rows(result, False), headers=_HEADERS, tablefmt="github"
    )
