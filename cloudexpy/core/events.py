"""Observer hooks around uploads and chunks."""
import time
from contextlib import contextmanager
from typing import Dict, List, Callable, Optional, Any, Iterator

# Events emitted by cloudexpy, each as '<name>.start' and '<name>.stop'.
UPLOAD = 'upload'
UPLOAD_LARGE = 'upload_large'
CHUNK = 'chunk'


class EventEmitter:
    """
    Event emitter using Observer Pattern.

    Callbacks receive a single metadata dict. Stop events carry
    ``duration`` (seconds) and ``outcome`` ('success' or 'failure').

    Example:
        >>> events = EventEmitter()
        >>> events.on('chunk.stop', lambda meta: print(meta['duration']))
    """

    def __init__(self):
        """Initializes event emitter."""
        self._events: Dict[str, List[Callable]] = {}

    def on(self, event: str, callback: Callable[[Dict[str, Any]], None]) -> 'EventEmitter':
        """Registers an event handler."""
        self._events.setdefault(event, []).append(callback)
        return self

    def emit(self, event: str, metadata: Dict[str, Any]):
        """Emits an event."""
        for callback in self._events.get(event, []):
            callback(metadata)

    def off(self, event: str, callback: Optional[Callable] = None) -> 'EventEmitter':
        """Removes an event handler (all handlers when callback is None)."""
        if event not in self._events:
            return self

        if callback is None:
            del self._events[event]
        else:
            self._events[event] = [cb for cb in self._events[event] if cb != callback]

        return self

    @contextmanager
    def span(self, name: str, **metadata: Any) -> Iterator[Dict[str, Any]]:
        """
        Emit ``<name>.start`` now and ``<name>.stop`` when the block exits.

        The yielded dict is sent with the stop event, so the block can add
        to it. An exception leaving the block marks the outcome as failure
        and is re-raised.
        """
        self.emit(f"{name}.start", dict(metadata))
        started = time.monotonic()
        stop_metadata = dict(metadata)
        outcome = 'failure'
        try:
            yield stop_metadata
            outcome = stop_metadata.pop('outcome', 'success')
        finally:
            stop_metadata['duration'] = time.monotonic() - started
            stop_metadata['outcome'] = outcome
            self.emit(f"{name}.stop", stop_metadata)
