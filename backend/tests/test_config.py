"""
Unit tests for mail settings loaded from the environment.
"""

import pytest

from jidi_api.config import load_mail_settings
from jidi_api.errors import ConfigurationError


class TestLoadMailSettings:

    def test_reads_required_values(self):
        settings = load_mail_settings()

        assert settings.host == "smtp.test.local"
        assert settings.port == 587
        assert settings.secure is False
        assert settings.user == "info@jidi.test"
        assert settings.password == "test-password"
        assert settings.is_production is True

    def test_port_defaults_to_587(self, mail_env):
        mail_env.delenv("EMAIL_PORT")
        assert load_mail_settings().port == 587

    def test_operator_address_defaults_to_user(self):
        assert load_mail_settings().operator_address == "info@jidi.test"

    def test_operator_address_override(self, mail_env):
        mail_env.setenv("EMAIL_OPERATOR_ADDRESS", "team@jidi.test")
        assert load_mail_settings().operator_address == "team@jidi.test"

    def test_secure_true(self, mail_env):
        mail_env.setenv("EMAIL_SECURE", "TRUE")
        mail_env.setenv("EMAIL_PORT", "465")
        settings = load_mail_settings()
        assert settings.secure is True
        assert settings.port == 465

    def test_empty_password_means_no_login(self, mail_env):
        mail_env.setenv("EMAIL_PASS", "")
        assert load_mail_settings().password is None

    def test_environment_defaults_to_development(self, mail_env):
        mail_env.delenv("APP_ENV")
        settings = load_mail_settings()
        assert settings.environment == "development"
        assert settings.is_production is False

    @pytest.mark.parametrize("missing", ["EMAIL_HOST", "EMAIL_USER"])
    def test_missing_required_value_raises(self, mail_env, missing):
        mail_env.delenv(missing)
        with pytest.raises(ConfigurationError) as exc_info:
            load_mail_settings()
        assert missing in str(exc_info.value)

    def test_non_numeric_port_raises(self, mail_env):
        mail_env.setenv("EMAIL_PORT", "smtp")
        with pytest.raises(ConfigurationError, match="EMAIL_PORT"):
            load_mail_settings()

    def test_port_out_of_range_raises(self, mail_env):
        mail_env.setenv("EMAIL_PORT", "70000")
        with pytest.raises(ConfigurationError, match="out of range"):
            load_mail_settings()

    def test_unrecognised_secure_flag_raises(self, mail_env):
        mail_env.setenv("EMAIL_SECURE", "yes")
        with pytest.raises(ConfigurationError, match="EMAIL_SECURE"):
            load_mail_settings()

    def test_non_numeric_timeout_raises(self, mail_env):
        mail_env.setenv("EMAIL_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError, match="EMAIL_TIMEOUT"):
            load_mail_settings()
