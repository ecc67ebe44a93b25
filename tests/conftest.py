import queue
import threading
import time

import pytest


class QueueInput:
    """Blocking stand in for stdin. Put lines in, put None for end of input"""

    def __init__(self):
        self.lines = queue.Queue()

    def put(self, line):
        self.lines.put(line)

    def readline(self):
        line = self.lines.get(timeout=10)
        return '' if line is None else line


class Console:
    """Accumulates everything captured on stdout, across threads"""

    def __init__(self, capsys):
        self.capsys = capsys
        self.text = ''

    def read(self):
        self.text += self.capsys.readouterr().out
        return self.text

    def lines(self):
        return self.read().splitlines()

    def wait_for(self, expected, timeout=5.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if expected in self.read():
                return
            time.sleep(0.01)
        raise AssertionError(f"{expected!r} never printed, got:\n{self.text}")


@pytest.fixture
def console(capsys):
    return Console(capsys)


@pytest.fixture
def input_stream():
    return QueueInput()


@pytest.fixture
def run_client():
    """Start a client's blocking start() on its own thread"""
    threads = []

    def _run(client):
        thread = threading.Thread(target=client.start, daemon=True)
        thread.start()
        threads.append(thread)
        return thread

    yield _run

    for thread in threads:
        thread.join(timeout=5)
