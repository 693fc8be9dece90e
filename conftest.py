from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from fakexhr.router import Router
from fakexhr.utils.log import _uninstall_fakexhr_root_handler
from fakexhr.xhr import XMLHttpRequest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def router() -> Router:
    return Router()


@pytest.fixture
def xhr(router: Router) -> XMLHttpRequest:
    return XMLHttpRequest(router)


@pytest.fixture(autouse=True)
def _reset_root_handler() -> Generator[None]:
    yield
    _uninstall_fakexhr_root_handler()
