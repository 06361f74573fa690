import random
from typing import Dict, List, Tuple

import pytest

from qute_server.dispatcher import Dispatcher
from qute_server.schemas import OutboundRecord
from qute_server.state import ServerState


class RecordingSender:
    """Collects outbound records instead of putting them on a socket."""

    def __init__(self):
        self.sent: List[Tuple[Tuple[str, int], dict]] = []

    def send(self, record: OutboundRecord, address: str, port: int) -> None:
        self.sent.append(((address, port), record.model_dump(mode="json", by_alias=True)))

    def to(self, port: int, address: str = "127.0.0.1") -> List[dict]:
        return [record for endpoint, record in self.sent if endpoint == (address, port)]

    def by_port(self) -> Dict[int, List[dict]]:
        grouped: Dict[int, List[dict]] = {}
        for (_, port), record in self.sent:
            grouped.setdefault(port, []).append(record)
        return grouped

    def clear(self) -> None:
        self.sent.clear()


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def state(sender):
    return ServerState(sender, rng=random.Random(1234))


@pytest.fixture
def dispatcher(state):
    return Dispatcher(state)


# Ports double as client identities in these tests: u1 -> 5001, u2 -> 5002 ...
PORTS = {"u1": 5001, "u2": 5002, "u3": 5003, "u4": 5004}


@pytest.fixture
def connect(state):
    def _connect(*session_ids: str) -> None:
        for sid in session_ids:
            state.connect(sid, "127.0.0.1", PORTS[sid], username=sid)

    return _connect
