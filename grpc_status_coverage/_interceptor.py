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
"""Client interceptors recording the terminal status of every RPC."""

import asyncio
import collections
import functools
import logging
import time

import grpc
from grpc import aio

from grpc_status_coverage import _errors
from grpc_status_coverage import _record
from grpc_status_coverage import _status

_LOGGER = logging.getLogger(__name__)


def split_method_path(method_path):
    """Splits "/package.Service/Method" into its service and method parts.

    Raises:
      ValueError: If the path does not name exactly a service and a method.
    """
    if isinstance(method_path, bytes):
        method_path = method_path.decode("utf-8")
    parts = [part for part in method_path.split("/") if part]
    if len(parts) != 2:
        raise ValueError("Invalid method path %r" % method_path)
    return parts[0], parts[1]


class OutcomeRecorder(object):
    """Persists one OutcomeRecord per completed RPC.

    A recorder without a store builds records but persists none of them.
    """

    def __init__(self, store, clock=time.time):
        self._store = store
        self._clock = clock

    @property
    def store(self):
        return self._store

    def record(self, method_path, status_code):
        """Records the terminal status of one RPC.

        Failures are logged and never propagate to the caller.

        Args:
          method_path: The fully qualified method path, e.g.
            "/helloworld.Greeter/SayHello", as str or bytes.
          status_code: A grpc.StatusCode or its integer value.

        Returns:
          The written OutcomeRecord, or None if nothing was recorded.
        """
        try:
            package_name, method_name = split_method_path(method_path)
            code = _status.status_code_value(status_code)
        except ValueError:
            _LOGGER.warning(
                "Not recording outcome of %r with status %r.",
                method_path,
                status_code,
            )
            return None
        record = _record.OutcomeRecord(
            package_name=package_name,
            method_name=method_name,
            status_code=code,
            timestamp=int(self._clock() * 1000),
        )
        if self._store is None:
            return record
        try:
            self._store.write(record)
        except _errors.RecordWriteError:
            _LOGGER.exception(
                "Outcome of %s/%s is lost.", package_name, method_name
            )
            return None
        return record


class StatusCoverageInterceptor(
    grpc.UnaryUnaryClientInterceptor,
    grpc.UnaryStreamClientInterceptor,
    grpc.StreamUnaryClientInterceptor,
    grpc.StreamStreamClientInterceptor,
):
    """Records the status of every RPC issued through an intercepted channel.

    The returned call is left untouched; its status is recorded from a
    done-callback once the RPC terminates.
    """

    def __init__(self, recorder):
        self._recorder = recorder

    def _on_done(self, method, call):
        self._recorder.record(method, call.code())

    def _intercept(self, continuation, client_call_details, request):
        call = continuation(client_call_details, request)
        call.add_done_callback(
            functools.partial(self._on_done, client_call_details.method)
        )
        return call

    def intercept_unary_unary(self, continuation, client_call_details, request):
        return self._intercept(continuation, client_call_details, request)

    def intercept_unary_stream(
        self, continuation, client_call_details, request
    ):
        return self._intercept(continuation, client_call_details, request)

    def intercept_stream_unary(
        self, continuation, client_call_details, request_iterator
    ):
        return self._intercept(
            continuation, client_call_details, request_iterator
        )

    def intercept_stream_stream(
        self, continuation, client_call_details, request_iterator
    ):
        return self._intercept(
            continuation, client_call_details, request_iterator
        )


class AioStatusCoverageInterceptor(object):
    """The grpc.aio counterpart of StatusCoverageInterceptor.

    grpc.aio files each interceptor under a single call shape, so this
    object hands out one interceptor per shape through `interceptors`. All
    of them share the recorder and the set of pending observer tasks::

        coverage = AioStatusCoverageInterceptor(recorder)
        channel = aio.insecure_channel(
            target, interceptors=coverage.interceptors
        )

    An observer task awaits the status of each call and records it, so the
    caller receives the call without waiting on the recording.
    """

    def __init__(self, recorder):
        self._recorder = recorder
        self._pending = set()
        self._interceptors = (
            _AioUnaryUnaryInterceptor(self),
            _AioUnaryStreamInterceptor(self),
            _AioStreamUnaryInterceptor(self),
            _AioStreamStreamInterceptor(self),
        )

    @property
    def recorder(self):
        return self._recorder

    @property
    def interceptors(self):
        return list(self._interceptors)

    async def _observe(self, method, call):
        code = await call.code()
        self._recorder.record(method, code)

    def watch(self, method, call):
        task = asyncio.get_running_loop().create_task(
            self._observe(method, call)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def wait_for_pending(self):
        """Waits until every outstanding status has been recorded."""
        while self._pending:
            await asyncio.gather(*tuple(self._pending))

    def drain(self):
        """Records outstanding statuses from outside any running event loop.

        Observer tasks whose event loop is closed or currently running cannot
        be driven from here; they are logged and left alone.
        """
        tasks_by_loop = collections.defaultdict(list)
        for task in tuple(self._pending):
            tasks_by_loop[task.get_loop()].append(task)
        for loop, tasks in tasks_by_loop.items():
            if loop.is_closed() or loop.is_running():
                _LOGGER.warning(
                    "%d RPC outcomes were not recorded before their event"
                    " loop stopped.",
                    len(tasks),
                )
                continue
            loop.run_until_complete(asyncio.gather(*tasks))


class _AioInterceptor(object):

    def __init__(self, coverage):
        self._coverage = coverage

    async def _intercept(self, continuation, client_call_details, request):
        call = await continuation(client_call_details, request)
        self._coverage.watch(client_call_details.method, call)
        return call


class _AioUnaryUnaryInterceptor(
    _AioInterceptor, aio.UnaryUnaryClientInterceptor
):

    async def intercept_unary_unary(
        self, continuation, client_call_details, request
    ):
        return await self._intercept(
            continuation, client_call_details, request
        )


class _AioUnaryStreamInterceptor(
    _AioInterceptor, aio.UnaryStreamClientInterceptor
):

    async def intercept_unary_stream(
        self, continuation, client_call_details, request
    ):
        return await self._intercept(
            continuation, client_call_details, request
        )


class _AioStreamUnaryInterceptor(
    _AioInterceptor, aio.StreamUnaryClientInterceptor
):

    async def intercept_stream_unary(
        self, continuation, client_call_details, request_iterator
    ):
        return await self._intercept(
            continuation, client_call_details, request_iterator
        )


class _AioStreamStreamInterceptor(
    _AioInterceptor, aio.StreamStreamClientInterceptor
):

    async def intercept_stream_stream(
        self, continuation, client_call_details, request_iterator
    ):
        return await self._intercept(
            continuation, client_call_details, request_iterator
        )


def intercept_channel(channel, recorder):
    """Wraps a channel so that the status of each RPC is recorded."""
    return grpc.intercept_channel(channel, StatusCoverageInterceptor(recorder))
