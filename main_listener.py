#!/usr/bin/env python3
"""
Main entry point for the listener application.

This script enables a Messenger, ticks it at a fixed rate and logs every
command it receives. Configuration is loaded from environment variables.
"""

import asyncio
import signal
import sys
import os
from typing import Optional, Tuple

from config.settings import Config
from messenger.messenger import Messenger
from protocol.arguments import Primitive
from transport.base import Transport
from utils.logging import setup_logging, set_traffic_logging, get_logger
from utils.exceptions import ConfigurationError, TransportUnavailableError

logger = get_logger(__name__)


class ListenerApplication:
    """Main application class for the command listener."""
    
    def __init__(self, transport: Optional[Transport] = None):
        """
        Initialize application.
        
        Args:
            transport: Datagram transport (UDP broadcast if omitted)
        """
        self.config = Config()
        self.transport = transport
        self.messenger: Optional[Messenger] = None
        self.shutdown_event = asyncio.Event()
    
    async def run(self) -> None:
        """
        Run the listener application.
        
        Loads configuration, enables the messenger, drives its tick until a
        shutdown signal arrives, and closes it.
        """
        try:
            # Load configuration
            logger.info("Loading configuration...")
            messenger_config = self.config.load_messenger_config()
            
            logger.info(
                f"Configuration loaded: "
                f"bind={messenger_config.bind_address}:{messenger_config.port}, "
                f"tick_interval={messenger_config.tick_interval:.4f}s"
            )
            
            # Create and enable messenger
            set_traffic_logging(messenger_config.log_traffic)
            self.messenger = Messenger(messenger_config, transport=self.transport)
            self.messenger.on_message(self.log_command)
            self.messenger.enable()
            
            logger.info("Listener application started successfully")
            logger.info("Press Ctrl+C to stop")
            
            # Tick until shutdown signal
            while not self.shutdown_event.is_set():
                self.messenger.tick()
                try:
                    await asyncio.wait_for(
                        self.shutdown_event.wait(),
                        timeout=messenger_config.tick_interval,
                    )
                except asyncio.TimeoutError:
                    pass
            
            logger.info("Shutdown signal received, stopping...")
            self.messenger.close()
            
            logger.info("Listener application stopped successfully")
            
        except ConfigurationError as e:
            logger.error(f"Configuration error: {e}")
            logger.error(
                "Please check your environment variables. "
                "See .env.example for available configuration."
            )
            sys.exit(1)
        except TransportUnavailableError as e:
            logger.error(f"Transport error: {e}")
            sys.exit(1)
        except Exception as e:
            logger.error(f"Unexpected error: {e}", exc_info=True)
            if self.messenger:
                self.messenger.close()
            sys.exit(1)
    
    def log_command(self, command: str, args: Tuple[Primitive, ...]) -> None:
        """Log a received command."""
        logger.info(f"Command: {command} {list(args)}")
    
    def handle_shutdown(self, signum, frame):
        """
        Handle shutdown signals.
        
        Args:
            signum: Signal number
            frame: Current stack frame
        """
        logger.info(f"Received signal {signum}")
        self.shutdown_event.set()


async def main():
    """Main entry point."""
    # Get log level from environment
    log_level = os.getenv('LOG_LEVEL', 'INFO')
    
    # Setup logging
    setup_logging(log_level)
    
    logger.info("Starting listener application...")
    
    # Create application
    app = ListenerApplication()
    
    # Setup signal handlers for graceful shutdown
    loop = asyncio.get_running_loop()
    
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(
            sig,
            lambda s=sig: app.handle_shutdown(s, None)
        )
    
    # Run application
    await app.run()


def cli() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nShutdown complete")
        sys.exit(0)


if __name__ == '__main__':
    cli()
