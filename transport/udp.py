"""UDP broadcast transport with a background receive thread."""

from typing import Optional
import socket
import threading

from protocol.constants import (
    DEFAULT_BIND_ADDRESS,
    DEFAULT_PORT,
    MAX_DATAGRAM_SIZE,
    RECEIVE_TIMEOUT,
)
from transport.base import DatagramCallback, Endpoint
from utils.exceptions import TransportUnavailableError
from utils.logging import get_logger

logger = get_logger(__name__)


class UdpBroadcastTransport:
    """
    Datagram transport over a single broadcast-capable UDP socket.
    
    The same socket sends and receives, so a process also receives its own
    broadcasts. Received payloads are passed to ``on_datagram`` from a
    daemon thread, concurrently with the rest of the application.
    """
    
    def __init__(
        self,
        bind_address: str = DEFAULT_BIND_ADDRESS,
        port: int = DEFAULT_PORT,
        broadcast_enabled: bool = True,
    ):
        self._bind_address = bind_address
        self._port = port
        self._broadcast_enabled = broadcast_enabled
        self._sock: Optional[socket.socket] = None
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self.on_datagram: Optional[DatagramCallback] = None
    
    @property
    def is_running(self) -> bool:
        return self._sock is not None
    
    @property
    def local_address(self) -> Endpoint:
        """Address the socket is bound to (useful when bound to port 0)."""
        if self._sock is None:
            raise TransportUnavailableError("UDP transport is not started")
        return self._sock.getsockname()
    
    def configure(self, bind_address: str, port: int, broadcast_enabled: bool) -> None:
        """
        Set socket parameters. Takes effect on the next start().
        
        Args:
            bind_address: Local address to bind, e.g. "0.0.0.0"
            port: Local UDP port
            broadcast_enabled: Whether to set SO_BROADCAST
        """
        self._bind_address = bind_address
        self._port = port
        self._broadcast_enabled = broadcast_enabled
    
    def start(self) -> None:
        """
        Bind the socket and start the receive thread.
        
        Calling start() on a running transport does nothing.
        
        Raises:
            TransportUnavailableError: If the socket cannot be created or bound
        """
        if self._sock is not None:
            return
        
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as e:
            raise TransportUnavailableError(f"Cannot create UDP socket: {e}") from e
        
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            if self._broadcast_enabled:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            sock.bind((self._bind_address, self._port))
            sock.settimeout(RECEIVE_TIMEOUT)
        except OSError as e:
            sock.close()
            logger.error(f"Failed to bind UDP socket {self._bind_address}:{self._port}: {e}")
            raise TransportUnavailableError(
                f"Cannot bind UDP socket {self._bind_address}:{self._port}: {e}"
            ) from e
        
        self._sock = sock
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._receive_loop,
            args=(sock,),
            name=f"udp-receive-{self._port}",
            daemon=True,
        )
        self._thread.start()
        
        logger.info(
            f"UDP transport bound to {self._bind_address}:{self._port} "
            f"(broadcast={'on' if self._broadcast_enabled else 'off'})"
        )
    
    def stop(self) -> None:
        """
        Stop the receive thread and close the socket.
        
        This method is idempotent and can be called multiple times safely.
        """
        if self._sock is None:
            return
        
        self._stop_event.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=RECEIVE_TIMEOUT * 5)
        self._thread = None
        
        try:
            self._sock.close()
        except OSError as e:
            logger.warning(f"Error closing UDP socket: {e}")
        finally:
            self._sock = None
        
        logger.info("UDP transport stopped")
    
    def send(self, endpoint: Endpoint, payload: bytes) -> None:
        """
        Send one datagram. Best effort: send failures are logged and dropped.
        
        Args:
            endpoint: Destination (host, port)
            payload: Datagram bytes
        
        Raises:
            TransportUnavailableError: If the transport is not started
        """
        sock = self._sock
        if sock is None:
            raise TransportUnavailableError("UDP transport is not started")
        
        try:
            sock.sendto(payload, endpoint)
        except OSError as e:
            logger.warning(f"Dropped datagram to {endpoint[0]}:{endpoint[1]}: {e}")
    
    def _receive_loop(self, sock: socket.socket) -> None:
        """Read datagrams until stop() is called."""
        logger.debug("Starting receive loop")
        
        while not self._stop_event.is_set():
            try:
                payload, _addr = sock.recvfrom(MAX_DATAGRAM_SIZE)
            except socket.timeout:
                continue
            except OSError:
                # Socket closed by stop()
                if self._stop_event.is_set():
                    break
                logger.warning("UDP receive error", exc_info=True)
                continue
            
            callback = self.on_datagram
            if callback is None:
                continue
            try:
                callback(payload)
            except Exception:
                logger.error("Error handling incoming datagram", exc_info=True)
        
        logger.debug("Receive loop stopped")
