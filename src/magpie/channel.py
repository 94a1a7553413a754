"""Delivery channel between producers and the publisher."""

import asyncio
import logging
from collections.abc import AsyncIterator

from .errors import ChannelClosedError
from .schemas import Message

logger = logging.getLogger(__name__)

# A message paired with the future its sender is waiting on.
_Envelope = tuple[Message, asyncio.Future]


class DeliveryChannel:
    """Unbuffered multi-producer/single-consumer message hand-off.

    ``send`` only returns once the consumer has received the message, so
    producers move at the publisher's pace and nothing is held in between.
    Messages from one sender arrive in the order they were sent; messages
    from different senders interleave freely.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[_Envelope | None] = asyncio.Queue()
        self._closed = False
        self._drained = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, message: Message) -> None:
        """Hand a message to the consumer, waiting until it is received.

        Raises:
            ChannelClosedError: The channel was closed before the message was received.
        """
        if self._closed:
            raise ChannelClosedError(f"cannot send to closed channel: {message.topic}")

        received = asyncio.get_running_loop().create_future()
        self._queue.put_nowait((message, received))
        # Cancelling the sender cancels the future too, and receive() skips it.
        await received

    async def receive(self) -> Message | None:
        """Wait for the next message; return None once the channel is closed."""
        while not self._drained:
            envelope = await self._queue.get()
            if envelope is None:
                self._drained = True
                break

            message, received = envelope
            if received.done():
                continue
            received.set_result(None)
            return message

        return None

    async def close(self) -> None:
        """Close the channel.

        Senders still waiting for the consumer fail with ChannelClosedError
        and the consumer sees the end of the channel.
        """
        if self._closed:
            return
        self._closed = True

        while not self._queue.empty():
            envelope = self._queue.get_nowait()
            if envelope is None:
                continue
            message, received = envelope
            if not received.done():
                received.set_exception(
                    ChannelClosedError(f"channel closed before {message.topic!r} was received")
                )
        self._queue.put_nowait(None)
        logger.debug("Delivery channel closed")

    def __aiter__(self) -> AsyncIterator[Message]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Message]:
        while True:
            message = await self.receive()
            if message is None:
                return
            yield message
