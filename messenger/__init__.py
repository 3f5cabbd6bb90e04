"""Command messaging pipeline: inbound handoff, duplicate suppression, dispatch and redundant send."""

from messenger.inbound_queue import InboundQueue
from messenger.suppressor import DuplicateSuppressor
from messenger.dispatcher import Dispatcher, CommandHandler
from messenger.sender import RedundantSender
from messenger.messenger import Messenger

__all__ = [
    'InboundQueue',
    'DuplicateSuppressor',
    'Dispatcher',
    'CommandHandler',
    'RedundantSender',
    'Messenger',
]
