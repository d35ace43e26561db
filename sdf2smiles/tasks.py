"""
Background conversion task.

Runs BatchConverter.convert_molecules on a worker thread and hands progress
events to the caller through a queue, so a UI can poll for them from its own
event loop without ever blocking the conversion.
"""

import queue
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional

from .converter import BatchConverter
from .models import ConversionResult, MoleculeSet, ProgressEvent


class ConversionTask:
    """
    A single conversion running in the background.

    Progress events arrive on ``events`` in record order. The task cannot be
    cancelled once started.

    Example:
        task = ConversionTask.start(converter, molecules)
        while not task.done():
            for event in task.drain():
                show(event.percent)
        result = task.result()
    """

    def __init__(self, converter: BatchConverter, molecules: MoleculeSet):
        self.converter = converter
        self.molecules = molecules
        self.events: "queue.Queue[ProgressEvent]" = queue.Queue()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._future: Optional[Future] = None

    @classmethod
    def start(cls, converter: BatchConverter, molecules: MoleculeSet) -> "ConversionTask":
        """Create a task and start it immediately."""
        task = cls(converter, molecules)
        task.run()
        return task

    def run(self) -> None:
        """
        Submit the conversion to a single worker thread.

        Raises:
            RuntimeError: If the task was already started
        """
        if self._future is not None:
            raise RuntimeError("Conversion task already started")

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sdf2smiles")
        self._future = self._executor.submit(
            self.converter.convert_molecules, self.molecules, self.events.put
        )
        # The worker thread exits once the conversion returns
        self._executor.shutdown(wait=False)

    @property
    def started(self) -> bool:
        return self._future is not None

    def done(self) -> bool:
        """Whether the conversion has finished, successfully or not."""
        return self._future is not None and self._future.done()

    def drain(self) -> List[ProgressEvent]:
        """Return all progress events received since the last call, in order."""
        events = []
        while True:
            try:
                events.append(self.events.get_nowait())
            except queue.Empty:
                return events

    def result(self, timeout: Optional[float] = None) -> ConversionResult:
        """
        Wait for and return the conversion result.

        Raises:
            RuntimeError: If the task was never started
            Exception: Whatever the conversion raised
        """
        if self._future is None:
            raise RuntimeError("Conversion task not started")
        return self._future.result(timeout=timeout)

    def exception(self) -> Optional[BaseException]:
        """The exception raised by a finished conversion, if any."""
        if not self.done():
            return None
        return self._future.exception()
