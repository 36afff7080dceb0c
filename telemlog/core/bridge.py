import logging
import threading
from queue import Full, Queue
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from telemlog.core.classifier import classify
from telemlog.core.constants import ALARM_FLAGS
from telemlog.core.utils import safe_json


class Bridge:
    """Fan raw messages out to classifier workers and hand each envelope to `sink`.

    The sink receives the JSON-safe wire dict of one OutputEnvelope.
    """

    def __init__(self, sink: Callable[[Dict[str, Any]], None], workers: int = 2,
                 queue_size: int = 10000, alarm_flags: Optional[Mapping[str, Sequence[int]]] = None):
        self.sink = sink
        self.workers = workers
        self.alarm_flags = alarm_flags if alarm_flags is not None else ALARM_FLAGS
        # Inbound raw messages (from transport -> classifier workers)
        self.q = Queue(maxsize=queue_size)
        self._run = False
        self._threads = []

    # --- lifecycle ---
    def start(self):
        self._run = True
        for i in range(self.workers):
            t = threading.Thread(target=self._proc_loop, name=f"telemlog-worker-{i}", daemon=False)
            t.start()
            self._threads.append(t)
        logging.info(f"[bridge] started {self.workers} worker(s)")

    def stop(self):
        self._run = False
        # None is a shutdown sentinel, one per worker
        for _ in self._threads:
            try:
                self.q.put(None, timeout=1.0)
            except Full:
                pass
        for thr in self._threads:
            thr.join(timeout=2.0)
        self._threads = []
        logging.info("[bridge] stopped")

    # --- called by transports ---
    def submit(self, message: Any) -> bool:
        try:
            self.q.put_nowait(message)
            return True
        except Full:
            logging.warning("[bridge] inbound queue full; dropping message")
            return False

    def process(self, message: Any) -> Dict[str, Any]:
        """Classify one message and deliver it to the sink synchronously."""
        out = safe_json(classify(message, alarm_flags=self.alarm_flags))
        try:
            self.sink(out)
        except Exception as e:
            logging.warning(f"[bridge] sink failed for {out.get('type')}: {e}")
        return out

    # --- internal workers ---
    def _proc_loop(self):
        while self._run:
            message = self.q.get()
            if message is None:
                break
            self.process(message)
