"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path
from typing import Callable

import pytest

USER_SERVICE = """\
import request from '@/utils/request';

/** Fetch the signed-in user */
export async function getUser(params?: Record<string, any>) {
  return request<API.CurrentUser>('/api/user', {
    method: 'GET',
    params,
  });
}

export async function updateUser(body: API.CurrentUser) {
  return request('/api/user', {
    method: 'PUT',
    data: body,
  });
}

export const USER_ROLES = ['admin', 'member'];
"""

ORDER_SERVICE = """\
import request from '@/utils/request';

export async function listOrders() {
  return request(`/api/orders`, {
    method: 'GET',
  });
}

export async function createOrder(body: API.OrderInput) {
  return request('/api/orders', {
    method: 'POST',
    data: body,
  });
}

// Same endpoint as getUser, under another name
export async function fetchCurrentUser() {
  return request('/api/user', {
    method: 'GET',
  });
}
"""

COMPONENT = "export default function Component() { return null; }\n"


@pytest.fixture
def examples_path() -> Path:
    """Get the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def sample_project(examples_path: Path) -> Path:
    """Get the path to the sample project in examples."""
    return examples_path / "sample_project"


@pytest.fixture
def make_src(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """
    Build a source tree under tmp_path.

    The returned factory takes {relative path: contents} and returns the
    source root.
    """
    src_root = tmp_path / "src"
    src_root.mkdir()

    def factory(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = src_root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return src_root

    return factory


@pytest.fixture
def service_src(make_src: Callable[[dict[str, str]], Path]) -> Path:
    """A source tree with `user` and `order` service groups."""
    return make_src({
        "services/user/index.ts": USER_SERVICE,
        "services/order/order.ts": ORDER_SERVICE,
        "utils/request.ts": "export default function request() {}\n",
    })


@pytest.fixture
def import_decl() -> Callable[..., dict]:
    """Builder for host ImportDeclaration records binding local names."""
    def build(source: str, *names: str, kind: str = "value") -> dict:
        return {
            "type": "ImportDeclaration",
            "source": source,
            "specifiers": [
                {"type": "ImportSpecifier", "local": name, "imported": name}
                for name in names
            ],
            "importKind": kind,
        }

    return build
