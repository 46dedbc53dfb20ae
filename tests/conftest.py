import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_xhprof_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("XHPROF_"):
            monkeypatch.delenv(name)
