"""Custom exception classes for the messaging layer."""


class MessengerError(Exception):
    """Base exception class for all messenger-related errors."""
    pass


class DecodeError(MessengerError):
    """Exception raised when inbound bytes are not a valid command datagram."""
    pass


class EncodeError(MessengerError):
    """Exception raised when a message cannot be represented on the wire."""
    pass


class MalformedAddressError(MessengerError):
    """Exception raised when a message address has no routable command segment."""
    
    def __init__(self, address: str):
        super().__init__(f"Address {address!r} has no command segment")
        self.address = address


class TransportUnavailableError(MessengerError):
    """Exception raised when the transport socket is not started or cannot bind."""
    pass


class ConfigurationError(MessengerError):
    """Exception raised when configuration is invalid or missing."""
    pass
