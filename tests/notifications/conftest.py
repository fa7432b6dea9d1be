import pytest
from notifications.channel import reset_channels, set_email_channel, set_file_sink
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.channel.file_sink import LocalFileSink
from notifications.notification.passport_events import dispatcher
from shared.auth import Role, UserContext


@pytest.fixture
def log_dir(tmp_path):
    return tmp_path / "notification-logs"


@pytest.fixture(autouse=True)
def _channels(log_dir):
    """Every test starts with no email channel and a file sink under tmp_path."""
    reset_channels()
    set_email_channel(None)
    set_file_sink(LocalFileSink(log_dir))
    yield
    reset_channels()


@pytest.fixture(autouse=True)
def _open_dispatcher():
    dispatcher.open()
    yield
    dispatcher.open()


@pytest.fixture
def fake_email():
    adapter = FakeEmailAdapter()
    set_email_channel(adapter)
    return adapter


@pytest.fixture
def user():
    return UserContext(user_id="user-001")


@pytest.fixture
def other_user():
    return UserContext(user_id="user-002")


@pytest.fixture
def admin():
    return UserContext(user_id="admin-001", role=Role.ADMIN.value)
