"""Producer/consumer handoff between the receive thread and the tick."""

from collections import deque
from typing import Deque, List
import threading

from protocol.messages import Message


class InboundQueue:
    """
    Thread-safe handoff for decoded inbound messages.
    
    The transport's receive thread calls ``enqueue`` for every datagram;
    the processing tick calls ``drain`` once per cycle. Only the producer
    side is shared, so it is the only state guarded by the lock, and the
    lock is held just long enough to append or swap out the contents.
    """
    
    def __init__(self):
        self._producer: Deque[Message] = deque()
        self._lock = threading.Lock()
    
    def __len__(self) -> int:
        return len(self._producer)
    
    def enqueue(self, message: Message) -> None:
        """Append a message on the producer side. Safe from any thread."""
        with self._lock:
            self._producer.append(message)
    
    def drain(self) -> List[Message]:
        """
        Move every queued message into a new list owned by the caller.
        
        Messages keep their arrival order and each one is returned by
        exactly one drain. Must only be called from the processing thread.
        
        Returns:
            Messages queued since the previous drain, oldest first
        """
        # Unlocked check: a message appended right after is picked up next drain
        if not self._producer:
            return []
        
        with self._lock:
            consumer = list(self._producer)
            self._producer.clear()
        return consumer
    
    def clear(self) -> int:
        """
        Drop every queued message.
        
        Returns:
            Number of messages dropped
        """
        with self._lock:
            dropped = len(self._producer)
            self._producer.clear()
        return dropped
