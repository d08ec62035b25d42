"""
SimpleOS Event Loop

A small timer loop for the kernel. It only handles one-shot timer
events, which is all the simulation needs: ``kill`` marks a process
terminated at once and asks the loop to drop it from the registry a
moment later.

The loop can run in a background thread (``start``) or be pumped by
hand (``process_events``), which is how the tests drive it with a fake
clock.

Author: YSNRFD
Version: 1.0.0
"""

import heapq
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, List

from simpleos.logger import get_logger


@dataclass(order=True)
class Event:
    """
    A scheduled timer event.

    Events are ordered by due time, then by id so that two events due at
    the same instant fire in scheduling order.
    """
    scheduled_time: float
    event_id: int
    callback: Callable[[], Any] = field(compare=False)
    description: str = field(compare=False, default="")

    def execute(self) -> Any:
        return self.callback()


class EventLoop:
    """
    The kernel timer loop.

    Example:
        >>> loop = EventLoop()
        >>> loop.schedule_timer(my_callback, delay=1.0)
        >>> loop.start()
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        poll_interval: float = 0.01
    ):
        self._logger = get_logger('event_loop')
        self._clock = clock
        self._poll_interval = poll_interval
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._event_counter = 0
        self._timer_queue: List[Event] = []  # min-heap on (scheduled_time, event_id)
        self._events_processed = 0
        self._shutdown_event = threading.Event()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending_count(self) -> int:
        """Number of timer events not yet fired."""
        with self._lock:
            return len(self._timer_queue)

    def start(self) -> None:
        """Fire due events from a daemon thread until ``stop``."""
        if self._running:
            return

        self._running = True
        self._shutdown_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            name='simpleos-event-loop',
            daemon=True
        )
        self._thread.start()
        self._logger.debug("Event loop started")

    def stop(self) -> None:
        """
        Stop the event loop.

        Pending events are discarded; none of them fire after this call
        returns.
        """
        if self._running:
            self._running = False
            self._shutdown_event.set()

            if self._thread and self._thread.is_alive():
                self._thread.join(timeout=2.0)
            self._thread = None

        with self._lock:
            dropped = len(self._timer_queue)
            self._timer_queue.clear()

        self._logger.debug(
            "Event loop stopped",
            context={
                'events_processed': self._events_processed,
                'events_dropped': dropped
            }
        )

    def _run_loop(self) -> None:
        while self._running:
            self.process_events()
            self._shutdown_event.wait(self._poll_interval)

    def process_events(self) -> int:
        """
        Fire every event whose due time has passed.

        Callback errors are logged and never propagate.

        Returns:
            Number of events fired
        """
        fired = 0

        while True:
            with self._lock:
                if not self._timer_queue or self._timer_queue[0].scheduled_time > self._clock():
                    break
                event = heapq.heappop(self._timer_queue)

            try:
                event.execute()
            except Exception as e:
                self._logger.exception(
                    f"Timer callback failed: {e}",
                    exc=e,
                    context={'event_id': event.event_id, 'description': event.description}
                )
            with self._lock:
                self._events_processed += 1
            fired += 1

        return fired

    def schedule_timer(
        self,
        callback: Callable[[], Any],
        delay: float,
        description: str = ""
    ) -> int:
        """
        Schedule a one-shot timer event.

        Args:
            callback: Function to call when the event fires
            delay: Delay in seconds before the event fires
            description: Label used in log records

        Returns:
            Event ID for cancellation
        """
        with self._lock:
            self._event_counter += 1
            event = Event(
                scheduled_time=self._clock() + max(delay, 0.0),
                event_id=self._event_counter,
                callback=callback,
                description=description
            )
            heapq.heappush(self._timer_queue, event)

        return event.event_id

    def cancel_event(self, event_id: int) -> bool:
        """
        Cancel a scheduled event.

        Returns:
            True if the event was cancelled, False if not found
        """
        with self._lock:
            for i, event in enumerate(self._timer_queue):
                if event.event_id == event_id:
                    self._timer_queue.pop(i)
                    heapq.heapify(self._timer_queue)
                    return True
        return False

    def get_stats(self) -> dict[str, Any]:
        """Counters for diagnostics."""
        with self._lock:
            return {
                'running': self._running,
                'events_processed': self._events_processed,
                'pending_timers': len(self._timer_queue),
            }
