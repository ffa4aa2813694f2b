from collections.abc import Callable
from threading import Event, Thread

from .utils import setup_logger

logger = setup_logger(name="core.periodic_task")


class PeriodicTask:
    def __init__(
        self,
        interval_seconds: float,
        task_function: Callable,
        initial_delay: float = 0.0,
    ):
        """
        Initialize a periodic task.

        Args:
            interval_seconds: Interval between task executions in seconds; 0 runs the task once
            task_function: The function to be executed periodically
            initial_delay: Seconds to wait before the first execution
        """
        self.interval_seconds = interval_seconds
        self.task_function = task_function
        self.initial_delay = initial_delay
        self.running = False
        self.thread = None
        self._stop_event = Event()

    def start(self):
        """Start the periodic task"""
        if not self.running:
            self.running = True
            self._stop_event.clear()
            self.thread = Thread(target=self._run, name="periodic-task", daemon=True)
            self.thread.start()

    def stop(self, timeout: float | None = None):
        """Stop the periodic task"""
        self._stop_event.set()
        if self.thread:
            self.thread.join(timeout)
        self.running = False

    def _run(self):
        """Main loop for the periodic task"""
        if self._stop_event.wait(self.initial_delay):
            return

        while True:
            try:
                self.task_function()
            except Exception as e:
                logger.error(f"Error in periodic task: {e}")

            if self.interval_seconds <= 0 or self._stop_event.wait(self.interval_seconds):
                break

        self.running = False
