"""Root test configuration for QRGuard.

Clears the QRGUARD_* environment overrides so a developer's shell settings
never leak into config or CLI tests, and restores the default structlog
configuration after each test (CLI tests reconfigure it against captured
streams).
"""

import pytest

from qrguard.utils.logger import configure_logging


@pytest.fixture(autouse=True)
def clean_qrguard_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("QRGUARD_CONFIG", "QRGUARD_LOG_LEVEL", "QRGUARD_TRACE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging()
