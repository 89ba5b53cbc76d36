from __future__ import annotations

from collections.abc import Generator

import pytest

from filecat.logging import setup_logging


@pytest.fixture(autouse=True)
def plain_logs(capsys: pytest.CaptureFixture[str]) -> pytest.CaptureFixture[str]:
    """Send uncolored log lines to the stderr captured by ``capsys``."""
    setup_logging(use_color=False)
    return capsys


@pytest.hookimpl(wrapper=True, trylast=True)
def pytest_runtest_call(item: pytest.Item) -> Generator[None, None, None]:
    # The stderr stream seen during fixture setup is closed before the test
    # body runs; rebind the log handler to the stream captured for the call.
    setup_logging(use_color=False)
    return (yield)
