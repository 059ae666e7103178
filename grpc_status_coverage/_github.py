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
"""Publishes a coverage summary as a comment on the current pull request."""

import json
import logging
import os

import requests

from grpc_status_coverage import _errors
from grpc_status_coverage import _report

_LOGGER = logging.getLogger(__name__)

_DEFAULT_GITHUB_API_URL = "https://api.github.com"
_REQUEST_TIMEOUT_S = 30
# GitHub rejects comment bodies above 65536 characters.
_MAX_BODY_LEN = 65400

_COMMENT_TITLE = "## gRPC status coverage"


def _pull_request_number(event_path):
    with open(event_path, "r", encoding="utf-8") as f:
        event = json.load(f)
    pull_request = event.get("pull_request") or {}
    number = pull_request.get("number") or event.get("number")
    if number is None:
        return None
    return int(number)


def format_comment(result):
    body = "%s\n\n%s\n" % (_COMMENT_TITLE, _report.format_markdown(result))
    if len(body) > _MAX_BODY_LEN:
        body = body[:_MAX_BODY_LEN] + "\n\n\n... CLIPPED (too long)"
    return body


class GitHubCommentPublisher(object):
    """Comments the coverage table on the pull request of a GitHub Actions run.

    Requires the GITHUB_TOKEN, GITHUB_REPOSITORY and GITHUB_EVENT_PATH
    environment variables; the publisher does nothing when any is missing or
    when the run was not triggered by a pull request.
    """

    def __init__(self, environ=None, session=None):
        self._environ = os.environ if environ is None else environ
        self._session = session

    def _post(self, url, headers, body):
        if self._session is not None:
            return self._session.post(
                url, headers=headers, json=body, timeout=_REQUEST_TIMEOUT_S
            )
        return requests.post(
            url, headers=headers, json=body, timeout=_REQUEST_TIMEOUT_S
        )

    def publish(self, result):
        """Posts the comment.

        Returns:
          True if a comment was posted, False if publishing was skipped.

        Raises:
          PublishError: If the comment could not be posted.
        """
        for key in ("GITHUB_TOKEN", "GITHUB_REPOSITORY", "GITHUB_EVENT_PATH"):
            if not self._environ.get(key):
                _LOGGER.info("Missing %s env var: not commenting", key)
                return False
        try:
            number = _pull_request_number(self._environ["GITHUB_EVENT_PATH"])
        except (OSError, ValueError) as e:
            raise _errors.PublishError(
                "Failed to read the GitHub event payload: %s" % e
            ) from e
        if number is None:
            _LOGGER.info("Not a pull request event: not commenting")
            return False

        api_url = self._environ.get("GITHUB_API_URL") or _DEFAULT_GITHUB_API_URL
        url = "%s/repos/%s/issues/%d/comments" % (
            api_url.rstrip("/"),
            self._environ["GITHUB_REPOSITORY"],
            number,
        )
        headers = {
            "Authorization": "Bearer %s" % self._environ["GITHUB_TOKEN"],
            "Accept": "application/vnd.github+json",
        }
        try:
            resp = self._post(url, headers, {"body": format_comment(result)})
            resp.raise_for_status()
        except requests.RequestException as e:
            raise _errors.PublishError(
                "Failed to comment on pull request %d: %s" % (number, e)
            ) from e
        _LOGGER.info("Commented status coverage on pull request %d", number)
        return True
