"""
Shared fixtures. Every test runs against a fixed set of EMAIL_* settings and
a fresh transport cache. APP_ENV defaults to production so no SMTP self-check
is scheduled unless a test opts in.
"""

import pytest

from jidi_api.services.mail_transport import reset_transport

TEST_ENV = {
    "EMAIL_HOST": "smtp.test.local",
    "EMAIL_PORT": "587",
    "EMAIL_SECURE": "false",
    "EMAIL_USER": "info@jidi.test",
    "EMAIL_PASS": "test-password",
    "APP_ENV": "production",
}


@pytest.fixture(autouse=True)
def mail_env(monkeypatch):
    for key in ("EMAIL_OPERATOR_ADDRESS", "EMAIL_FROM_NAME", "EMAIL_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    reset_transport()
    yield monkeypatch
    reset_transport()
