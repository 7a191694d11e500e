"""
Unit tests for the page request resolver.
"""

from pathlib import Path
from typing import Callable

import pytest

from page_request_map.analyzer.page_request import PageRequestResolver
from page_request_map.config import Config, ProjectConfig, ResolverConfig
from page_request_map.models.descriptor import ApiDescriptor
from page_request_map.parser.declaration_loader import DeclarationLoader

GET_USER = ApiDescriptor(name="getUser", method="GET", url="/api/user")
LIST_ORDERS = ApiDescriptor(name="listOrders", method="GET", url="/api/orders")
CREATE_ORDER = ApiDescriptor(name="createOrder", method="POST", url="/api/orders")

NEW_USER_FUNCTION = """
export async function deleteUser() {
  return request('/api/user', {
    method: 'DELETE',
  });
}
"""


def touch(src: Path, *relatives: str) -> None:
    """Create empty module files under the source root."""
    for relative in relatives:
        path = src / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


class TestPreconditions:
    """Tests for passes that cannot run."""

    def test_no_source_root(self) -> None:
        """Test that a missing source root gives an empty report with an error."""
        report = PageRequestResolver().create_page_request_map({})

        assert report.has_errors
        assert report.errors == ["No source root configured"]
        assert report.page_request_map == {}

    def test_no_declaration_map(self, service_src: Path) -> None:
        """Test that a missing declaration map gives an empty report with an error."""
        report = PageRequestResolver(src_root=service_src).create_page_request_map(None)

        assert report.errors == ["No declaration map supplied"]
        assert report.entries == []

    def test_src_root_from_config(self, service_src: Path) -> None:
        """Test that the source root can come from configuration."""
        config = Config(project=ProjectConfig(src_root=service_src))

        resolver = PageRequestResolver(config=config)

        assert resolver.src_root == str(service_src).replace("\\", "/")

    def test_empty_declaration_map(self, service_src: Path) -> None:
        """Test that an empty map is a valid pass with no pages."""
        report = PageRequestResolver(src_root=service_src).create_page_request_map({})

        assert not report.has_errors
        assert report.page_request_map == {}
        assert report.service_groups == 2


class TestSampleProject:
    """Tests against the bundled sample project."""

    @pytest.fixture
    def report(self, sample_project: Path):
        """Resolve the sample project."""
        file_imports = DeclarationLoader.parse_file(sample_project / "declarations.json")
        resolver = PageRequestResolver(src_root=sample_project / "src")
        return resolver.create_page_request_map(file_imports)

    def test_page_request_map(self, report) -> None:
        """Test the resolved requests of every page."""
        assert report.page_request_map == {
            "/Profile": [GET_USER],
            "/Orders/index": [GET_USER, CREATE_ORDER, LIST_ORDERS],
            "/Home": [],
        }

    def test_report_summary(self, report) -> None:
        """Test the report counters."""
        assert report.total_files == 5
        assert report.service_groups == 2
        assert report.page_count == 3
        assert report.request_count == 3
        assert report.duration_ms is not None
        assert report.warnings == []

    def test_entry_files(self, report) -> None:
        """Test that entries remember their page file."""
        assert report.get_entry("/Orders/index").file == "@/pages/Orders/index.tsx"
        assert report.get_entry("/Missing") is None


class TestPasses:
    """Tests for repeated passes and per-pass state."""

    def test_services_refreshed_every_pass(
        self,
        service_src: Path,
        import_decl: Callable[..., dict],
    ) -> None:
        """Test that service changes are seen by the next pass."""
        resolver = PageRequestResolver(src_root=service_src)
        file_imports = {
            f"{service_src}/pages/Profile.tsx": [import_decl("@/services/user", "deleteUser")],
        }
        assert resolver.create_page_request_map(file_imports).page_request_map == {"/Profile": []}

        user_service = service_src / "services" / "user" / "index.ts"
        user_service.write_text(user_service.read_text() + NEW_USER_FUNCTION, encoding="utf-8")

        report = resolver.create_page_request_map(file_imports)
        assert report.page_request_map["/Profile"][0].name == "deleteUser"

    def test_services_kept_until_invalidated(
        self,
        service_src: Path,
        import_decl: Callable[..., dict],
    ) -> None:
        """Test the explicit invalidation hook when refresh is off."""
        config = Config(resolver=ResolverConfig(refresh_services=False))
        resolver = PageRequestResolver(config=config, src_root=service_src)
        file_imports = {
            f"{service_src}/pages/Profile.tsx": [import_decl("@/services/user", "deleteUser")],
        }
        resolver.create_page_request_map(file_imports)

        user_service = service_src / "services" / "user" / "index.ts"
        user_service.write_text(user_service.read_text() + NEW_USER_FUNCTION, encoding="utf-8")

        assert resolver.create_page_request_map(file_imports).page_request_map == {"/Profile": []}

        resolver.invalidate_services()

        assert resolver.create_page_request_map(file_imports).page_request_map["/Profile"] != []

    def test_new_files_seen_by_next_pass(
        self,
        service_src: Path,
        import_decl: Callable[..., dict],
    ) -> None:
        """Test that path caches do not outlive a pass."""
        resolver = PageRequestResolver(src_root=service_src)
        file_imports = {
            f"{service_src}/pages/A.tsx": [import_decl("@/components/Card", "Card")],
            f"{service_src}/components/Card.tsx": [import_decl("@/services/user", "getUser")],
        }
        assert resolver.create_page_request_map(file_imports).page_request_map == {"/A": []}

        touch(service_src, "components/Card.tsx")

        assert resolver.create_page_request_map(file_imports).page_request_map == {"/A": [GET_USER]}

    def test_ambiguity_warnings(
        self,
        service_src: Path,
        import_decl: Callable[..., dict],
    ) -> None:
        """Test that ambiguous imports are reported and then forgotten."""
        touch(service_src, "components/Icon.jsx", "components/Icon.tsx")
        resolver = PageRequestResolver(src_root=service_src)

        report = resolver.create_page_request_map({
            f"{service_src}/pages/A.tsx": [import_decl("@/components/Icon", "Icon")],
        })

        assert report.warnings == [
            "Ambiguous import @/components/Icon matches 2 files: "
            "@/components/Icon.jsx, @/components/Icon.tsx"
        ]
        assert resolver.path_resolver.ambiguities == {}


class TestEntries:
    """Tests for page entry selection and assembly."""

    def test_only_page_components_are_entries(
        self,
        service_src: Path,
        import_decl: Callable[..., dict],
    ) -> None:
        """Test that helpers under pages/ and files elsewhere are not pages."""
        resolver = PageRequestResolver(src_root=service_src)

        report = resolver.create_page_request_map({
            f"{service_src}/pages/A.tsx": [],
            f"{service_src}/pages/helpers.ts": [import_decl("@/services/user", "getUser")],
            f"{service_src}/components/B.tsx": [import_decl("@/services/user", "getUser")],
        })

        assert list(report.page_request_map) == ["/A"]

    def test_same_page_in_two_files_merged(
        self,
        service_src: Path,
        import_decl: Callable[..., dict],
    ) -> None:
        """Test that Page.tsx and Page.jsx share one deduplicated entry."""
        resolver = PageRequestResolver(src_root=service_src)

        report = resolver.create_page_request_map({
            f"{service_src}/pages/A.tsx": [import_decl("@/services/user", "getUser")],
            f"{service_src}/pages/A.jsx": [
                import_decl("@/services/order/order", "fetchCurrentUser", "listOrders"),
            ],
        })

        assert report.page_request_map == {"/A": [GET_USER, LIST_ORDERS]}
        assert report.get_entry("/A").file == "@/pages/A.tsx"

    def test_follow_reexports(
        self,
        service_src: Path,
        import_decl: Callable[..., dict],
    ) -> None:
        """Test that barrel re-exports are traversed only when enabled."""
        touch(service_src, "api/index.ts")
        file_imports = {
            f"{service_src}/pages/A.tsx": [import_decl("@/api", "getUser")],
            f"{service_src}/api/index.ts": [
                {
                    "type": "ExportNamedDeclaration",
                    "source": "@/services/user",
                    "specifiers": [{"type": "ExportSpecifier", "local": "getUser", "exported": "getUser"}],
                    "exportKind": "value",
                },
            ],
        }

        default = PageRequestResolver(src_root=service_src)
        following = PageRequestResolver(
            config=Config(resolver=ResolverConfig(follow_reexports=True)),
            src_root=service_src,
        )

        assert default.create_page_request_map(file_imports).page_request_map == {"/A": []}
        assert following.create_page_request_map(file_imports).page_request_map == {"/A": [GET_USER]}
