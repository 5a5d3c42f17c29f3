"""
Task Service - Runs booklet generation on a background thread.

The worker publishes a ProgressEvent per completed sheet on a queue; the
observer polls it without blocking. Cancellation is requested through an
event that the worker only checks between sheets.
"""

import logging
import queue
import threading
from pathlib import Path
from typing import List, Optional, Union

from ..errors import BookletError
from ..models import BookletOptions, ImpositionResult, ProgressEvent
from .booklet_service import BookletService

logger = logging.getLogger(__name__)


class ImpositionTask:
    """
    One booklet generation running on a daemon thread.

    Example:
        >>> task = ImpositionTask('comic.pdf', 'comic_booklet.pdf', BookletOptions())
        >>> task.start()
        >>> while not task.done:
        ...     print(f"{task.progress:.0%}")
        >>> result = task.wait()
    """

    def __init__(
        self,
        source_path: Union[str, Path],
        output_path: Union[str, Path],
        options: BookletOptions,
        service: Optional[BookletService] = None
    ):
        self.source_path = Path(source_path)
        self.output_path = Path(output_path)
        self.options = options
        self.progress_queue: queue.Queue = queue.Queue()

        self._service = service or BookletService()
        self._cancel_event = threading.Event()
        self._finished = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._fraction = 0.0
        self._result: Optional[ImpositionResult] = None
        self._error: Optional[BaseException] = None

    def start(self):
        """Start the worker thread."""
        if self._thread is not None:
            raise RuntimeError("Task already started")

        self._thread = threading.Thread(
            target=self._run, name=f"imposition-{self.source_path.name}", daemon=True
        )
        self._thread.start()

    def _run(self):
        try:
            self._result = self._service.generate(
                self.source_path,
                self.output_path,
                self.options,
                progress=self.progress_queue,
                cancel_event=self._cancel_event
            )
        except BookletError as e:
            logger.error("Booklet generation failed: %s", e)
            self._error = e
        except Exception as e:
            logger.exception("Booklet generation crashed")
            self._error = e
        finally:
            self._finished.set()

    def cancel(self):
        """Request cancellation; takes effect at the next sheet boundary."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    def poll(self) -> List[ProgressEvent]:
        """Drain the progress queue, returning the events received since the last poll."""
        events = []
        while True:
            try:
                event = self.progress_queue.get_nowait()
            except queue.Empty:
                break
            events.append(event)
            self._fraction = max(self._fraction, event.fraction)
        return events

    @property
    def progress(self) -> float:
        """Fraction of pages completed, 0.0 to 1.0; never decreases."""
        self.poll()
        return self._fraction

    def wait(self, timeout: Optional[float] = None) -> Optional[ImpositionResult]:
        """
        Wait for the worker to finish.

        Returns:
            The ImpositionResult, or None if the timeout expired first

        Raises:
            BookletError: The error that ended the run (including ImpositionCancelled)
            Exception: Any other error raised by the worker, unchanged
        """
        if self._thread is None:
            raise RuntimeError("Task not started")

        if not self._finished.wait(timeout):
            return None
        self._thread.join()

        if self._error is not None:
            raise self._error
        return self._result
