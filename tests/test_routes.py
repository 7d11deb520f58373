"""Tests for :mod:`seo.routes`: stop names collected from URL namespaces."""

from __future__ import annotations

from seo import routes


class TestRouteStopNames:
    def test_literal_first_segments_are_collected(self) -> None:
        assert routes.route_stop_names("testapp") == ["create", "tag", "legacy", "notes", "pages"]

    def test_unknown_namespace_gives_nothing(self, caplog) -> None:
        assert routes.route_stop_names("missing") == []
        assert "missing" in caplog.text

    def test_result_is_cached_per_namespace(self, monkeypatch) -> None:
        routes.route_stop_names("testapp")

        def fail():
            raise AssertionError("resolver consulted twice")

        monkeypatch.setattr(routes, "get_resolver", fail)

        assert "create" in routes.route_stop_names("testapp")

    def test_first_segment_parsing(self) -> None:
        assert routes._first_segment("create/") == "create"
        assert routes._first_segment("^edit/(?P<pk>\\d+)/$") == "edit"
        assert routes._first_segment("<slug:title>/") == ""
        assert routes._first_segment("") == ""
