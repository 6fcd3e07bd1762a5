import pytest


class FakeRunner:
    """Stands in for the shell executor; records every command line"""

    def __init__(self, outputs=None, error=None):
        self.commands = []
        self.outputs = list(outputs or [])
        self.error = error

    async def __call__(self, command: str) -> str:
        self.commands.append(command)
        if self.error is not None:
            raise self.error
        return self.outputs.pop(0) if self.outputs else ""


@pytest.fixture
def fake_runner():
    return FakeRunner
