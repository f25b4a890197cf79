import logging
import os

from chore_calendar.core.config import Settings
from chore_calendar.core.env_config import cors_origins_for, load_env_files
from chore_calendar.core.logging_config import setup_logging


class TestEnvFiles:
    def test_most_specific_file_wins(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CHORE_TEST_VALUE", raising=False)
        (tmp_path / ".env.staging").write_text("CHORE_TEST_VALUE=staging\n")
        (tmp_path / ".env").write_text("CHORE_TEST_VALUE=base\nCHORE_TEST_ONLY_BASE=yes\n")

        loaded = load_env_files("staging")

        assert loaded == [".env.staging", ".env"]
        assert os.environ["CHORE_TEST_VALUE"] == "staging"
        assert os.environ["CHORE_TEST_ONLY_BASE"] == "yes"
        monkeypatch.delenv("CHORE_TEST_VALUE")
        monkeypatch.delenv("CHORE_TEST_ONLY_BASE")

    def test_no_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert load_env_files("production") == []


class TestCorsOrigins:
    def test_local_frontend_adds_dev_servers(self):
        origins = cors_origins_for("http://localhost:3000/")

        assert origins[0] == "http://localhost:3000"
        assert "http://localhost:5173" in origins

    def test_no_duplicates(self):
        origins = cors_origins_for("http://localhost:5173")

        assert origins.count("http://localhost:5173") == 1

    def test_deployed_frontend_only(self):
        assert cors_origins_for("https://chores.example.com") == ["https://chores.example.com"]


class TestSettings:
    def test_postgres_url_is_rewritten(self):
        settings = Settings(DATABASE_URL="postgres://u:p@db/chores")

        assert settings.DATABASE_URL == "postgresql://u:p@db/chores"
        assert not settings.is_sqlite

    def test_cors_from_frontend_url(self):
        settings = Settings(FRONTEND_URL="https://chores.example.com")

        assert settings.CORS_ORIGINS == ["https://chores.example.com"]

    def test_environment_endpoint(self, client):
        response = client.get("/config/environment")

        assert response.status_code == 200
        assert response.json()["environment"] == "development"
        assert "SECRET_KEY" not in response.json()


class TestLogging:
    def test_writes_to_rotating_file(self, tmp_path):
        setup_logging(log_dir=str(tmp_path), environment="production")
        try:
            logging.getLogger("chore_calendar.test").info("hello from the test")
            for handler in logging.getLogger().handlers:
                handler.flush()

            assert "hello from the test" in (tmp_path / "chore_calendar.log").read_text()
            assert logging.getLogger("chore_calendar").level == logging.INFO
        finally:
            for name in ("", "sqlalchemy.engine"):
                configured = logging.getLogger(name or None)
                for handler in list(configured.handlers):
                    handler.close()
                    configured.removeHandler(handler)
