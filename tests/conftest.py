from typing import Callable, Optional

import httpx
import pytest
from typer.testing import CliRunner

from triviacli.core.client import TriviaClient
from triviacli.infrastructure.cli.display import ConsoleDisplay
from triviacli.infrastructure.config.settings import clear_test_config

from tests.fakes import BASE_URL, FakeBank, FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def bank(fake_clock: FakeClock) -> FakeBank:
    return FakeBank(clock=fake_clock)


@pytest.fixture
def make_client(bank: FakeBank, fake_clock: FakeClock) -> Callable[..., TriviaClient]:
    """Builds TriviaClient instances wired to the fake bank and clock."""

    def _make(token: Optional[str] = None, min_interval: float = 5.0, event_sink=None, transport=None) -> TriviaClient:
        http_client = httpx.AsyncClient(base_url=BASE_URL, transport=transport or bank.transport)
        return TriviaClient(
            http_client,
            min_interval=min_interval,
            clock=fake_clock,
            event_sink=event_sink,
            token=token,
        )

    return _make


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_test_config():
    yield
    clear_test_config()


@pytest.fixture
def mock_console_display(mocker):
    """Patches ConsoleDisplay in main so CLI tests can assert on UI calls."""
    display = mocker.MagicMock(spec=ConsoleDisplay)
    mocker.patch("triviacli.main.ConsoleDisplay", return_value=display)
    return display


@pytest.fixture
def cli_bank(mocker):
    """Routes the CLI's TriviaClient to a scripted bank with no rate delay."""
    fake_bank = FakeBank()

    def build(**kwargs):
        http_client = httpx.AsyncClient(base_url=BASE_URL, transport=fake_bank.transport)
        return TriviaClient(http_client, min_interval=0, token=kwargs.get("token"))

    mocker.patch.object(TriviaClient, "from_settings", side_effect=build)
    return fake_bank
