from types import SimpleNamespace


def make_pod(phase, exit_code=None, reason=None, name="python-script-abcde"):
    container_statuses = None
    if exit_code is not None:
        terminated = SimpleNamespace(exit_code=exit_code, reason=reason)
        container_statuses = [SimpleNamespace(state=SimpleNamespace(terminated=terminated))]
    status = SimpleNamespace(phase=phase, container_statuses=container_statuses)
    return SimpleNamespace(metadata=SimpleNamespace(name=name), status=status)


def created_pod(name="python-script-abcde"):
    return SimpleNamespace(metadata=SimpleNamespace(name=name))


class FakeLogResponse:
    """Stands in for the urllib3 response returned with _preload_content=False."""

    def __init__(self, chunks, error=None):
        self.chunks = list(chunks)
        self.error = error
        self.closed = False
        self.released = False
        self.requested_amt = None

    def stream(self, amt=None, decode_content=None):
        self.requested_amt = amt
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error

    def close(self):
        self.closed = True

    def release_conn(self):
        self.released = True
