"""Tests for the uvicorn logging setup."""

from uvicorn.config import LOGGING_CONFIG

from storefront_admin.config import Config
from storefront_admin.web.runner import build_log_config


def make_config(debug):
    return Config(database_url="mongodb://localhost:27017/storefront_test", debug=debug)


class TestBuildLogConfig:
    """Tests for build_log_config."""

    def test_formats_carry_service_name(self):
        """Test that access and default lines are tagged with the service name."""
        log_config = build_log_config(make_config(debug=False))
        assert "storefront-admin access" in log_config["formatters"]["access"]["fmt"]
        assert "storefront-admin" in log_config["formatters"]["default"]["fmt"]

    def test_level_follows_debug_flag(self):
        """Test that debug mode lowers uvicorn loggers to DEBUG."""
        assert build_log_config(make_config(debug=True))["loggers"]["uvicorn.access"]["level"] == "DEBUG"
        assert build_log_config(make_config(debug=False))["loggers"]["uvicorn.access"]["level"] == "INFO"

    def test_uvicorn_defaults_untouched(self):
        """Test that building a config does not mutate uvicorn's module-level defaults."""
        build_log_config(make_config(debug=True))
        assert "storefront-admin" not in LOGGING_CONFIG["formatters"]["access"]["fmt"]
        assert LOGGING_CONFIG["loggers"]["uvicorn.access"]["level"] == "INFO"
