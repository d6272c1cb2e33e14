"""Tests for switchyard.routing.pattern — normalisation, compilation, expansion."""

import pytest

from switchyard.routing.pattern import (
    OPTIONAL_CAPTURE,
    REQUIRED_CAPTURE,
    compile_path,
    expand_path,
    normalise_path,
)


class TestNormalisePath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("/users/42", "/users/42/"),
            ("users/42/", "/users/42/"),
            ("//a//b///", "/a/b/"),
            ("", "/"),
            ("/", "/"),
        ],
    )
    def test_wraps_and_collapses(self, raw: str, expected: str) -> None:
        assert normalise_path(raw) == expected


class TestCompilePath:
    def test_static_path_is_not_dynamic(self) -> None:
        compiled = compile_path("/about/")
        assert compiled.regex is None
        assert compiled.param_names == ()
        assert compiled.is_dynamic is False

    def test_required_placeholder(self) -> None:
        compiled = compile_path("/users/{id}/")
        assert compiled.param_names == ("id",)
        assert compiled.regex is not None
        assert REQUIRED_CAPTURE in compiled.regex.pattern

    def test_optional_placeholder_name_drops_marker(self) -> None:
        compiled = compile_path("/posts/{slug?}/")
        assert compiled.param_names == ("slug",)
        assert compiled.regex is not None
        assert OPTIONAL_CAPTURE in compiled.regex.pattern

    def test_multiple_placeholders_keep_order(self) -> None:
        compiled = compile_path("/users/{user}/posts/{post?}/")
        assert compiled.param_names == ("user", "post")

    def test_trailing_placeholder_without_slash_is_ignored(self) -> None:
        compiled = compile_path("/users/{id}")
        assert compiled.is_dynamic is False
        assert compiled.param_names == ()

    def test_only_slash_terminated_placeholders_count(self) -> None:
        compiled = compile_path("/users/{user}/posts/{post}")
        assert compiled.param_names == ("user",)

    def test_missing_leading_slash_is_fine(self) -> None:
        compiled = compile_path("users/{id}/")
        assert compiled.param_names == ("id",)

    def test_placeholder_inside_segment_is_ignored(self) -> None:
        compiled = compile_path("/files/{name}.json")
        assert compiled.is_dynamic is False

    def test_literal_text_is_escaped(self) -> None:
        compiled = compile_path("/v1.0/{id}/")
        assert compiled.regex is not None
        assert compiled.regex.search("/v1.0/7/") is not None
        assert compiled.regex.search("/v1x0/7/") is None

    def test_source_is_preserved(self) -> None:
        assert compile_path("users/{id}/").source == "users/{id}/"


class TestExpandPath:
    def test_required_placeholder(self) -> None:
        assert expand_path("/user/{id}/", {"id": 7}) == "/user/7/"

    def test_optional_placeholder(self) -> None:
        assert expand_path("/posts/{slug?}/", {"slug": "hello"}) == "/posts/hello/"

    def test_unfilled_placeholders_are_stripped(self) -> None:
        assert expand_path("/user/{id}/posts/{page?}/", {}) == "/user//posts//"

    def test_extra_parameters_are_ignored(self) -> None:
        assert expand_path("/user/{id}/", {"id": 1, "tab": "info"}) == "/user/1/"

    def test_values_are_stringified(self) -> None:
        assert expand_path("/price/{amount}/", {"amount": 9.5}) == "/price/9.5/"
