"""Messenger: application-facing command messaging over UDP broadcast."""

from typing import Any, Callable, Optional
import time

from config.settings import MessengerConfig
from messenger.dispatcher import CommandHandler, Dispatcher
from messenger.inbound_queue import InboundQueue
from messenger.sender import RedundantSender
from messenger.suppressor import DuplicateSuppressor
from protocol.encoding import decode_message
from transport.base import Transport
from transport.udp import UdpBroadcastTransport
from utils.exceptions import DecodeError, MalformedAddressError
from utils.logging import get_logger

logger = get_logger(__name__)


class Messenger:
    """
    Best-effort command messaging for real-time applications.

    Commands are broadcast as OSC messages, each sent several times in a row.
    Received messages are queued by the transport's receive thread and
    delivered to handlers only when the host calls ``tick()``, once per
    frame, on its own thread:

        messenger = Messenger(config)
        messenger.on_message(lambda command, args: print(command, args))
        messenger.enable()
        while running:
            messenger.tick()
        messenger.close()

    Nothing is acknowledged or retried. Packet loss is silent; redundant
    copies of the same command within the duplicate window are delivered once.
    """

    def __init__(
        self,
        config: Optional[MessengerConfig] = None,
        transport: Optional[Transport] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize messenger.

        Args:
            config: Messenger configuration (defaults if omitted)
            transport: Datagram transport (UDP broadcast if omitted)
            clock: Monotonic time source in seconds

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self._config = config or MessengerConfig()
        self._config.validate()

        self._transport: Transport = transport or UdpBroadcastTransport()
        self._clock = clock
        self._enabled = False

        self._inbound = InboundQueue()
        self._suppressor = DuplicateSuppressor(
            window=self._config.duplicate_window_seconds,
            capacity=self._config.history_capacity,
            numeric_equality=self._config.numeric_equality,
        )
        self._dispatcher = Dispatcher(address_root=self._config.namespace)
        self._sender = RedundantSender(
            self._transport,
            self._config.endpoint,
            redundancy=self._config.redundant_send_count,
            address_root=self._config.namespace,
        )

    def __enter__(self) -> 'Messenger':
        self.enable()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def config(self) -> MessengerConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def suppressor(self) -> DuplicateSuppressor:
        return self._suppressor

    @property
    def is_running(self) -> bool:
        """True while enabled on a started transport."""
        return self._enabled and self._transport.is_running

    @property
    def pending(self) -> int:
        """Number of received messages waiting for the next tick."""
        return len(self._inbound)

    def enable(self) -> None:
        """
        Start the transport (first call only) and attach the receive path.

        Raises:
            TransportUnavailableError: If the socket cannot be bound; the
                messenger stays disabled
        """
        if self._enabled:
            return

        if not self._transport.is_running:
            self._transport.configure(
                self._config.bind_address,
                self._config.port,
                self._config.broadcast_enabled,
            )
            self._transport.start()
            logger.info(
                f"Messenger initialized {self._config.broadcast_address}:{self._config.port}"
            )

        # A receive callback racing the previous disable() may have queued
        # one more message after the clear there
        stale = self._inbound.clear()
        if stale:
            logger.debug(f"Dropped {stale} stale message(s) on enable")

        self._transport.on_datagram = self._handle_datagram
        self._enabled = True

    def disable(self) -> None:
        """
        Detach the receive path and drop messages not yet delivered.

        The transport keeps running so the messenger can be re-enabled and
        can still send.
        """
        if not self._enabled:
            return

        # Detach first so nothing is queued after the clear below
        self._transport.on_datagram = None
        self._enabled = False

        dropped = self._inbound.clear()
        if dropped:
            logger.debug(f"Dropped {dropped} undelivered message(s) on disable")

    def close(self) -> None:
        """
        Disable the messenger and stop the transport.

        This method is idempotent and can be called multiple times safely.
        """
        self.disable()
        if self._transport.is_running:
            self._transport.stop()
            logger.info("Messenger closed")

    def send_command(self, command: str, *args: Any) -> None:
        """
        Broadcast a command with arguments.

        ``int`` and ``float`` args are sent with their type; any other value
        is sent as its string form.

        Args:
            command: Command name, e.g. "move"
            *args: Command arguments

        Raises:
            MalformedAddressError: If the command is empty
            EncodeError: If an argument cannot be encoded (ints beyond 64 bits)
            TransportUnavailableError: If the transport is not started
        """
        self._sender.send(command, *args)

    def on_message(self, handler: CommandHandler) -> CommandHandler:
        """
        Register a handler called as ``handler(command, args)``.

        Returns the handler, so this also works as a decorator.
        """
        self._dispatcher.add_handler(handler)
        return handler

    def remove_handler(self, handler: CommandHandler) -> None:
        """Unregister a handler."""
        self._dispatcher.remove_handler(handler)

    def tick(self) -> int:
        """
        Deliver messages received since the previous tick.

        Drains the inbound queue, drops duplicates and dispatches the rest in
        arrival order. Must be called from a single thread, once per cycle.

        Returns:
            Number of messages dispatched
        """
        work = self._inbound.drain()
        if not work:
            return 0

        now = self._clock()
        dispatched = 0

        for message in work:
            if not self._suppressor.should_accept(message, now):
                continue

            logger.debug(f"Received: {message.describe()}")

            try:
                if self._dispatcher.dispatch(message):
                    dispatched += 1
            except MalformedAddressError as e:
                logger.warning(f"Dropped message: {e}")

        return dispatched

    def _handle_datagram(self, payload: bytes) -> None:
        """Decode a datagram and queue it. Runs on the transport's receive thread."""
        try:
            message = decode_message(payload)
        except DecodeError as e:
            logger.warning(f"Dropped malformed datagram: {e}")
            return

        # A datagram already in flight when disable() ran is dropped too
        if not self._enabled:
            return
        self._inbound.enqueue(message)
