"""
Publish/subscribe of lexis messages.

Messages travel in-process over PyPubSub topics (``message.TOPIC``, with a
single ``message`` argument). Between processes they travel as JSON envelope
lines on a text stream: a Publisher writes them, a Subscriber reads them back
and re-publishes them in-process.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, TextIO, Tuple, Type

from pubsub import pub

from .message import DecodeError, Message
from .serialization import decode_envelope, encode_envelope

logger = logging.getLogger(__name__)

Listener = Callable[[Message], None]


class Publisher:
    """Publishes messages in-process and, optionally, on a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def publish(self, message: Message) -> None:
        pub.sendMessage(message.TOPIC, message=message)
        if self.stream is not None:
            self.stream.write(encode_envelope(message) + "\n")
            self.stream.flush()


class Subscriber:
    """
    Registers callbacks per message type and dispatches received messages.

    PyPubSub only keeps weak references to listeners, so the subscriber holds
    the callbacks for as long as they are subscribed.
    """

    def __init__(self) -> None:
        self._listeners: List[Tuple[str, Listener]] = []

    def subscribe(self, message_type: Type[Message], callback: Listener) -> None:
        def listener(message: Message) -> None:
            callback(message)

        pub.subscribe(listener, message_type.TOPIC)
        self._listeners.append((message_type.TOPIC, listener))

    def unsubscribe_all(self) -> None:
        for topic, listener in self._listeners:
            pub.unsubscribe(listener, topic)
        self._listeners.clear()

    def receive(self, stream: TextIO) -> bool:
        """
        Read one envelope line from ``stream`` and dispatch it.

        Blank and undecodable lines are skipped with a log entry.

        Returns:
            False once the stream is exhausted.
        """
        line = stream.readline()
        if not line:
            return False
        line = line.strip()
        if not line:
            return True
        try:
            message = decode_envelope(line)
        except DecodeError as e:
            logger.warning("Dropping undecodable message: %s", e)
            return True
        pub.sendMessage(message.TOPIC, message=message)
        return True
