# tests/conftest.py
import pytest
from unittest.mock import MagicMock
from dependency_injector import providers

from colorizer.shared.container import Container
from colorizer.core.ports.color_settings_repository import IColorSettingsRepository
from colorizer.adapters.persistence.filesystem_repo import FileSystemColorSettingsRepository
from colorizer.services.rule_colorizer import RuleColorizer

from tests.fakes import FakeCompiler


@pytest.fixture(scope="function")
def compiler():
    return FakeCompiler()


@pytest.fixture(scope="function")
def colorizer(compiler):
    """An engine without persistence, seeded with the default rules."""
    return RuleColorizer(compiler)


@pytest.fixture(scope="function")
def settings_dir(tmp_path):
    return tmp_path / "settings"


@pytest.fixture(scope="function")
def repo(settings_dir, compiler):
    return FileSystemColorSettingsRepository(str(settings_dir), compiler)


@pytest.fixture(scope="function")
def mock_repo():
    """Returns a mock Color Settings Repository that has nothing stored."""
    repo = MagicMock(spec=IColorSettingsRepository)
    repo.load.return_value = None
    repo.save.return_value = True
    repo.exists.return_value = False
    return repo


@pytest.fixture(scope="function")
def recorder():
    """A change listener that records every event it receives."""
    events = []

    def listener(event):
        events.append(event)

    listener.events = events
    return listener


@pytest.fixture(scope="function")
def container(compiler, settings_dir):
    """
    Sets up the Dependency Injection Container for testing.
    It supplies the fake compiler and points storage at a temp directory.
    """
    container = Container()
    container.predicate_compiler.override(providers.Object(compiler))
    container.config.SETTINGS_DIRECTORY.from_value(str(settings_dir))

    yield container

    # Clean up overrides after test
    container.unwire()
    container.reset_singletons()
