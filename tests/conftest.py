"""Shared fakes for the host page, durable storage and prompts."""

import asyncio

import pytest


class MemoryStorage:
    """Dict-backed stand-in for the page's localStorage."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data = dict(data or {})
        self.writes: list[tuple[str, str]] = []

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.data[key] = value

    async def remove(self, key: str) -> None:
        self.data.pop(key, None)


class ScriptedPrompter:
    """Answers prompts from a list; None means the user dismissed it."""

    def __init__(self, answers: list[str | None] | None = None):
        self.answers = list(answers or [])
        self.asked: list[tuple[str, bool]] = []

    async def ask(self, text: str, secret: bool = False) -> str | None:
        self.asked.append((text, secret))
        if not self.answers:
            return None
        return self.answers.pop(0)


class FakeHostPage:
    """In-memory host page recording what the companion does to it."""

    def __init__(
        self,
        pathname: str = "/",
        origin: str = "https://alist.example.com",
        storage: dict[str, str] | None = None,
    ):
        self.path = pathname
        self._origin = origin
        self.storage = MemoryStorage(storage)
        self.mounted: set[str] = set()
        self.display_calls: list[bool] = []
        self.clicks: list[str] = []
        self.click_result = True
        self.notices: list[str] = []
        self.pathname_reads = 0
        self.frame_waits = 0
        self.frame_gate: asyncio.Event | None = None
        self.on_mutation = None
        self.on_activate = None
        self.load_callbacks: list = []

    async def origin(self) -> str:
        return self._origin

    async def pathname(self) -> str:
        self.pathname_reads += 1
        return self.path

    async def next_frame(self) -> None:
        self.frame_waits += 1
        if self.frame_gate is not None:
            await self.frame_gate.wait()
        else:
            await asyncio.sleep(0)

    async def install(self, on_mutation, on_activate) -> None:
        self.on_mutation = on_mutation
        self.on_activate = on_activate

    def on_document_load(self, callback) -> None:
        self.load_callbacks.append(callback)

    def reload(self) -> None:
        """Simulate a full document load: injected elements are gone."""
        self.mounted.clear()
        for callback in self.load_callbacks:
            callback()

    async def mount_control(self, element_id: str, label: str) -> bool:
        if element_id in self.mounted:
            return False
        self.mounted.add(element_id)
        return True

    async def set_control_visible(self, element_id: str, visible: bool) -> bool:
        self.display_calls.append(visible)
        return element_id in self.mounted

    async def click(self, selector: str) -> bool:
        self.clicks.append(selector)
        return self.click_result

    async def show_notice(self, message: str, seconds: int = 8) -> None:
        self.notices.append(message)


class FakeCipher:
    """Deterministic reversible stand-in for rclone name encryption."""

    def __init__(self, credentials):
        self.credentials = credentials

    async def encrypt(self, tail: str) -> str:
        return "/".join(
            f"{segment[::-1]}.{self.credentials.salt}" for segment in tail.split("/")
        )


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def host_page() -> FakeHostPage:
    return FakeHostPage(pathname="/crypt/a")


@pytest.fixture
def make_page():
    """Factory for fake host pages."""
    return FakeHostPage


@pytest.fixture
def make_prompter():
    """Factory for scripted prompters."""
    return ScriptedPrompter


@pytest.fixture
def cipher_factory():
    """Cipher factory producing FakeCipher instances."""
    return FakeCipher
