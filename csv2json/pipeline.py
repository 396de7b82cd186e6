#!/usr/bin/env python3
"""
csv2json/pipeline.py
Runs the CSV producer and the JSON writer side by side, connected by a
single-slot handoff channel.

    producer --send--> [ RecordChannel (1 slot) ] --iter--> writer --> .json
"""

import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator

from csv2json.errors import ChannelAborted
from csv2json.options import InputSpec
from csv2json.reader import CsvRowProducer
from csv2json.writer import JsonRecordWriter, json_output_path

logger = logging.getLogger(__name__)

_CLOSED = object()
_FAILED = object()
POLL_INTERVAL = 0.05


class RecordChannel:
    """
    Capacity-1 blocking handoff between one producer and one consumer.

    send() blocks while the slot is full. close() queues the end marker after
    the last record, so iteration stops once everything before it was taken.
    fail() queues a failure marker instead; iteration raises ChannelAborted
    when it reaches it. abort() releases a blocked sender when the consumer
    has failed.
    """

    def __init__(self):
        self._queue = queue.Queue(maxsize=1)
        self._aborted = threading.Event()
        self._closed = False

    def _put(self, item):
        while True:
            if self._aborted.is_set():
                raise ChannelAborted("record channel aborted by consumer")
            try:
                self._queue.put(item, timeout=POLL_INTERVAL)
                return
            except queue.Full:
                continue

    def _finish(self, marker):
        if self._closed:
            return
        self._closed = True
        try:
            self._put(marker)
        except ChannelAborted:
            # nobody is left to read the marker
            pass

    def send(self, record: Dict[str, str]):
        if self._closed:
            raise ChannelAborted("send on closed record channel")
        self._put(record)

    def close(self):
        self._finish(_CLOSED)

    def fail(self):
        self._finish(_FAILED)

    def abort(self):
        self._aborted.set()

    def __iter__(self) -> Iterator[Dict[str, str]]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                return
            if item is _FAILED:
                raise ChannelAborted("record channel failed by producer")
            yield item


@dataclass
class PipelineResult:
    output_path: Path
    rows_read: int
    records_written: int
    rows_skipped: int


def run_pipeline(spec: InputSpec) -> PipelineResult:
    """
    Convert spec.source_path into its sibling .json file.

    Blocks until the writer has finished; the writer's future is the
    completion latch. A fatal error from either side is re-raised here and
    leaves any existing destination untouched. When the producer fails, its
    error is the one raised, not the writer's reaction to it.
    """
    out_path = json_output_path(spec.source_path)
    producer = CsvRowProducer(spec)
    writer = JsonRecordWriter(out_path, pretty=spec.pretty)
    channel = RecordChannel()

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="csv2json") as executor:
        producer_future = executor.submit(producer.produce, channel)
        writer_future = executor.submit(writer.consume, channel)
        try:
            written = writer_future.result()
        except ChannelAborted:
            producer_future.result()
            raise
        except Exception:
            channel.abort()
            raise
        producer_future.result()

    logger.debug("%s: %d rows read, %d records written, %d rows skipped",
                 out_path, producer.rows_read, written, producer.rows_skipped)
    return PipelineResult(out_path, producer.rows_read, written, producer.rows_skipped)
