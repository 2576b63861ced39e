"""Tests for storage backend selection at startup."""

import logging
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from lpg_connect.config import Settings
from lpg_connect.errors import BackendUnavailableError
from lpg_connect.schemas import Role, User
from lpg_connect.stores.factory import create_store, get_store
from lpg_connect.stores.memory import InMemoryApplicationStore
from lpg_connect.stores.sql import SqlApplicationStore


def _settings(**overrides):
    return Settings(_env_file=None, **overrides)


class TestCreateStore:
    """Tests for create_store."""

    def test_durable_store_when_database_available(self, tmp_path):
        store = create_store(_settings(DATABASE_URL=f"sqlite:///{tmp_path / 'lpg.db'}"))
        assert isinstance(store, SqlApplicationStore)
        assert store.authenticate("admin", "admin123") is not None

    def test_durable_data_survives_a_new_store(self, tmp_path):
        """Data written through one store is visible to the next one."""
        config = _settings(DATABASE_URL=f"sqlite:///{tmp_path / 'lpg.db'}")
        create_store(config).register(User(username="eve", password="pw", role=Role.USER))
        assert create_store(config).authenticate("eve", "pw") is not None

    def test_falls_back_when_driver_missing(self, caplog):
        """A URL whose driver is not installed degrades to memory and logs a warning."""
        config = _settings(DATABASE_URL="mysql+notadriver://root@localhost/lpg_system")
        with caplog.at_level(logging.WARNING, logger="lpg_connect.stores.factory"):
            store = create_store(config)
        assert isinstance(store, InMemoryApplicationStore)
        assert "falling back to in-memory storage" in caplog.text
        assert "volatile backend" in caplog.text

    def test_falls_back_when_connection_refused(self, caplog):
        with patch(
            "lpg_connect.stores.factory.SqlApplicationStore.from_url"
        ) as mock_from_url:
            mock_from_url.return_value.initialize.side_effect = OperationalError(
                "connect", {}, Exception("Connection refused")
            )
            with caplog.at_level(logging.WARNING):
                store = create_store(_settings())
        assert isinstance(store, InMemoryApplicationStore)
        assert "Connection refused" in caplog.text

    def test_fallback_store_is_seeded_from_settings(self):
        with patch(
            "lpg_connect.stores.factory.SqlApplicationStore.from_url",
            side_effect=ImportError("No module named 'pymysql'"),
        ):
            store = create_store(_settings(VOLATILE_ID_START=2000))
        assert store.list_all_applications()[0].app_id == 2000

    def test_durable_selection_logs_backend_kind(self, tmp_path, caplog):
        with caplog.at_level(logging.INFO, logger="lpg_connect.stores.factory"):
            create_store(_settings(DATABASE_URL=f"sqlite:///{tmp_path / 'lpg.db'}"))
        assert "Using durable storage" in caplog.text

    def test_configured_volatile_logs_backend_kind(self, caplog):
        with caplog.at_level(logging.INFO, logger="lpg_connect.stores.factory"):
            create_store(_settings(STORAGE_BACKEND="volatile"))
        assert "Using volatile storage" in caplog.text

    def test_volatile_backend_skips_database(self):
        with patch("lpg_connect.stores.factory.SqlApplicationStore.from_url") as mock_from_url:
            store = create_store(_settings(STORAGE_BACKEND="volatile"))
        mock_from_url.assert_not_called()
        assert isinstance(store, InMemoryApplicationStore)

    def test_durable_backend_does_not_fall_back(self):
        with patch(
            "lpg_connect.stores.factory.SqlApplicationStore.from_url",
            side_effect=ImportError("No module named 'pymysql'"),
        ):
            with pytest.raises(BackendUnavailableError):
                create_store(_settings(STORAGE_BACKEND="durable"))

    def test_seeding_can_be_disabled(self):
        store = create_store(_settings(STORAGE_BACKEND="volatile", SEED_DEFAULT_DATA=False))
        assert store.list_users() == []


class TestGetStore:
    """Tests for the get_store dependency."""

    def test_returns_store_from_app_state(self):
        request = MagicMock()
        sentinel = object()
        request.app.state.store = sentinel
        assert get_store(request) is sentinel
