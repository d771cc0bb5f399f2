from __future__ import annotations

import httpstrategy


def test_version() -> None:
    assert isinstance(httpstrategy.__version__, str)


def test_all_exports_exist() -> None:
    for name in httpstrategy.__all__:
        assert hasattr(httpstrategy, name), name
