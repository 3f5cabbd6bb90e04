#!/usr/bin/env python3
"""
Main entry point for sending a single command.

Usage:
    main_sender.py COMMAND [ARG ...]

Arguments that parse as integers or floats are sent with that type,
everything else is sent as a string. Configuration is loaded from
environment variables.
"""

import argparse
import sys
import os
from typing import List, Optional, Union

from config.settings import Config
from messenger.messenger import Messenger
from utils.logging import setup_logging, set_traffic_logging, get_logger
from utils.exceptions import MessengerError

logger = get_logger(__name__)


def parse_value(text: str) -> Union[int, float, str]:
    """
    Convert a command-line argument to the value sent on the wire.
    
    Args:
        text: Raw argument
        
    Returns:
        int if the text is an integer, float if it is a number, else the text
    """
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Broadcast one command to every listener.")
    parser.add_argument("command", help="command name, e.g. move")
    parser.add_argument("args", nargs="*", help="command arguments")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    
    # Setup logging
    setup_logging(os.getenv('LOG_LEVEL', 'INFO'))
    
    try:
        messenger_config = Config().load_messenger_config()
        set_traffic_logging(messenger_config.log_traffic)
        values = [parse_value(a) for a in args.args]
        
        with Messenger(messenger_config) as messenger:
            messenger.send_command(args.command, *values)
        
        logger.info(
            f"Sent {args.command} {values} to "
            f"{messenger_config.broadcast_address}:{messenger_config.port} "
            f"x{messenger_config.redundant_send_count}"
        )
        return 0
    except MessengerError as e:
        logger.error(f"Send failed: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
