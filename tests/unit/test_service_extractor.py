"""
Unit tests for service descriptor extraction.
"""

from pathlib import Path
from typing import Callable

from page_request_map.models.descriptor import ApiDescriptor
from page_request_map.parser.service_extractor import (
    ServiceExtractor,
    extract_descriptors,
    strip_comments,
)


class TestExtractDescriptors:
    """Tests for extract_descriptors()."""

    def test_basic_function(self) -> None:
        """Test a function with method and request URL."""
        source = """
export async function getUser() {
  return request('/api/user', {
    method: 'GET',
  });
}
"""
        descriptors = extract_descriptors(source)

        assert descriptors == {
            "getUser": ApiDescriptor(name="getUser", method="GET", url="/api/user"),
        }

    def test_generic_request_and_template_url(self) -> None:
        """Test request<T>() with a template literal URL."""
        source = """
export function getOrder(id: string) {
  return request<API.Order<Item>>(
    `/api/orders/${id}`,
    { method: "DELETE" },
  );
}
"""
        descriptors = extract_descriptors(source)

        assert descriptors["getOrder"].method == "DELETE"
        assert descriptors["getOrder"].url == "/api/orders/${id}"

    def test_callee_containing_request(self) -> None:
        """Test that any callee whose name contains 'request' is accepted."""
        source = """
export async function save(body) {
  return umiRequest('/api/save', { method: 'POST', data: body });
}
"""
        descriptors = extract_descriptors(source)

        assert descriptors["save"].url == "/api/save"

    def test_incomplete_fragments_are_skipped(self) -> None:
        """Test that fragments missing name, method or URL give nothing."""
        source = """
export const ROLES = ['admin'];

export function noMethod() {
  return request('/api/a');
}

export function noRequest() {
  return fetch('/api/b', { method: 'GET' });
}
"""
        assert extract_descriptors(source) == {}

    def test_duplicate_names_last_wins(self) -> None:
        """Test that a later definition replaces an earlier one."""
        source = """
export function load() {
  return request('/api/old', { method: 'GET' });
}
export function load() {
  return request('/api/new', { method: 'GET' });
}
"""
        assert extract_descriptors(source)["load"].url == "/api/new"

    def test_commented_out_function_is_ignored(self) -> None:
        """Test that commented-out code yields no descriptor."""
        source = """
/*
export function legacy() {
  return request('/api/legacy', { method: 'GET' });
}
*/
export function current() {
  return request('/api/current', { method: 'GET' }); // live
}
"""
        descriptors = extract_descriptors(source)

        assert list(descriptors) == ["current"]

    def test_strip_comments_keeps_urls(self) -> None:
        """Test that // inside URLs is not treated as a comment."""
        source = "request('https://example.com/api', { method: 'GET' }) // trailing"

        stripped = strip_comments(source)

        assert "https://example.com/api" in stripped
        assert "trailing" not in stripped


    def test_comment_markers_inside_strings(self) -> None:
        """Test that /* and // inside string literals do not start comments."""
        source = """
export function listFiles() {
  return request('/api/files/*', { method: 'GET' });
}

export function getMirror() {
  return request("https://mirror.example.com//api", { method: 'GET' });
}

/** Upload a file */
export function upload() {
  return request(`/api/upload`, { method: 'POST' }); // multipart
}
"""
        descriptors = extract_descriptors(source)

        assert list(descriptors) == ["listFiles", "getMirror", "upload"]
        assert descriptors["listFiles"].url == "/api/files/*"
        assert descriptors["getMirror"].url == "https://mirror.example.com//api"

    def test_strip_comments_keeps_strings(self) -> None:
        """Test that string literals survive comment stripping unchanged."""
        source = "const a = '/* x */'; /* gone */ const b = \"// y\"; // gone too"

        assert strip_comments(source) == "const a = '/* x */';  const b = \"// y\"; "


class TestServiceExtractor:
    """Tests for the ServiceExtractor class."""

    def test_extract_groups(self, service_src: Path) -> None:
        """Test that each services subdirectory becomes a group."""
        service_map = ServiceExtractor(service_src).extract()

        assert list(service_map) == ["order", "user"]
        assert set(service_map["user"]) == {"getUser", "updateUser"}
        assert set(service_map["order"]) == {"listOrders", "createOrder", "fetchCurrentUser"}
        assert service_map["order"]["listOrders"].url == "/api/orders"

    def test_declaration_files_excluded(
        self,
        make_src: Callable[[dict[str, str]], Path],
    ) -> None:
        """Test that .d.ts files and unknown extensions are skipped."""
        body = "export function ghost() { return request('/api/ghost', { method: 'GET' }); }"
        src = make_src({
            "services/misc/typings.d.ts": body,
            "services/misc/notes.md": body,
        })

        assert ServiceExtractor(src).extract() == {"misc": {}}

    def test_files_outside_groups_ignored(
        self,
        make_src: Callable[[dict[str, str]], Path],
    ) -> None:
        """Test that files directly in services/ do not form a group."""
        src = make_src({
            "services/index.ts": "export function a() { return request('/a', { method: 'GET' }); }",
        })

        assert ServiceExtractor(src).extract() == {}

    def test_missing_services_directory(self, tmp_path: Path) -> None:
        """Test that a tree without services gives an empty map."""
        assert ServiceExtractor(tmp_path).extract() == {}

    def test_sample_project(self, sample_project: Path) -> None:
        """Test extraction on the bundled sample project."""
        service_map = ServiceExtractor(sample_project / "src").extract()

        assert set(service_map["user"]) == {"getUser", "updateUser"}
        assert "ghost" not in service_map["order"]
        assert service_map["order"]["createOrder"] == ApiDescriptor(
            name="createOrder", method="POST", url="/api/orders"
        )
