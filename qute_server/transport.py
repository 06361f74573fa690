"""UDP transport: feeds datagrams to the dispatcher and sends records back out."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

from .codec import encode_record
from .dispatcher import Dispatcher
from .schemas import OutboundRecord
from .state import ServerState

logger = logging.getLogger(__name__)


class DatagramSender:
    """``Sender`` backed by an asyncio datagram transport."""

    def __init__(self) -> None:
        self.transport: Optional[asyncio.DatagramTransport] = None

    def send(self, record: OutboundRecord, address: str, port: int) -> None:
        if self.transport is None or self.transport.is_closing():
            logger.warning(f"Transport closed; dropping {type(record).__name__} for {address}:{port}")
            return
        self.transport.sendto(encode_record(record), (address, port))


class RelayProtocol(asyncio.DatagramProtocol):
    """Hands each datagram to the dispatcher; handling runs to completion in the callback."""

    def __init__(self, dispatcher: Dispatcher, sender: DatagramSender):
        self.dispatcher = dispatcher
        self.sender = sender

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        self.sender.transport = transport  # type: ignore[assignment]
        sockname = transport.get_extra_info("sockname")
        logger.info(f"Relay listening on UDP {sockname[0]}:{sockname[1]}")

    def datagram_received(self, data: bytes, addr: Tuple[str, int]) -> None:
        address, port = addr[0], addr[1]
        logger.debug(f"Recv {address}:{port} {data!r}")
        self.dispatcher.dispatch(data, address, port)

    def error_received(self, exc: Exception) -> None:
        logger.error(f"Socket error: {exc}")

    def connection_lost(self, exc: Optional[Exception]) -> None:
        if exc is not None:
            logger.error(f"Relay socket closed with error: {exc}")
        else:
            logger.info("Relay socket closed")
        self.sender.transport = None


async def open_relay_endpoint(
    host: str,
    port: int,
    max_code_attempts: int = 1000,
) -> Tuple[asyncio.DatagramTransport, ServerState]:
    """Bind the UDP socket on the running loop and return it with fresh server state."""
    sender = DatagramSender()
    state = ServerState(sender, max_code_attempts=max_code_attempts)
    dispatcher = Dispatcher(state)
    loop = asyncio.get_running_loop()
    transport, _ = await loop.create_datagram_endpoint(
        lambda: RelayProtocol(dispatcher, sender),
        local_addr=(host, port),
    )
    return transport, state


__all__ = ["DatagramSender", "RelayProtocol", "open_relay_endpoint"]
