import pytest

from mcp_service.host import LocalApp
from tests.fakes import RecordingChatService


@pytest.fixture
def chat_service() -> RecordingChatService:
    return RecordingChatService()


@pytest.fixture
def app(chat_service) -> LocalApp:
    return LocalApp(services=[chat_service])
