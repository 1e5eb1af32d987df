"""Tests for hypermux.routing.template — template/path matching."""

import pytest

from hypermux.errors import TemplateMismatchError
from hypermux.routing.template import extract_params, is_capture, is_compatible, parse_template


class TestIsCapture:
    def test_braced_segment(self) -> None:
        assert is_capture("{id}") is True

    def test_empty_name_is_still_a_capture(self) -> None:
        assert is_capture("{}") is True

    def test_literal(self) -> None:
        assert is_capture("users") is False

    def test_unbalanced(self) -> None:
        assert is_capture("{id") is False
        assert is_capture("id}") is False
        assert is_capture("{") is False

    def test_empty(self) -> None:
        assert is_capture("") is False


class TestParseTemplate:
    def test_keeps_leading_empty_segment(self) -> None:
        segments = parse_template("/users")
        assert [s.value for s in segments] == ["", "users"]
        assert segments[0].is_empty is True

    def test_capture(self) -> None:
        segments = parse_template("/users/{id}")
        assert segments[2].is_capture is True
        assert segments[2].name == "id"

    def test_literal_has_no_name(self) -> None:
        segments = parse_template("/users/{id}")
        assert segments[1].is_capture is False
        assert segments[1].name is None

    def test_trailing_slash_adds_empty_segment(self) -> None:
        assert len(parse_template("/users/")) == 3


class TestIsCompatible:
    def test_exact_match(self) -> None:
        assert is_compatible("/users", "/users") is True

    def test_exact_match_with_braces_in_path(self) -> None:
        assert is_compatible("/a/{b}", "/a/{b}") is True

    def test_literal_mismatch(self) -> None:
        assert is_compatible("/users", "/posts") is False

    def test_no_capture_and_different_length(self) -> None:
        assert is_compatible("/users", "/users/42") is False

    def test_single_capture(self) -> None:
        assert is_compatible("/users/{id}", "/users/42") is True

    def test_capture_between_literals(self) -> None:
        assert is_compatible("/ahoy/{key}/hoya", "/ahoy/somevalue/hoya") is True

    def test_literal_after_capture_must_match(self) -> None:
        assert is_compatible("/ahoy/{key}/hoya", "/ahoy/somevalue/other") is False

    def test_segment_count_differs(self) -> None:
        assert is_compatible("/users/{id}", "/users/42/posts") is False
        assert is_compatible("/users/{id}", "/users") is False

    def test_no_trailing_slash_normalisation(self) -> None:
        assert is_compatible("/users/{id}", "/users/42/") is False

    def test_case_sensitive_literals(self) -> None:
        assert is_compatible("/Users/{id}", "/users/42") is False

    def test_capture_matches_any_characters(self) -> None:
        assert is_compatible("/files/{name}", "/files/Report-2024.PDF") is True

    def test_empty_path_segment_is_skipped(self) -> None:
        # Doubled slashes are tolerated rather than rejected.
        assert is_compatible("/users/{id}/posts", "/users//posts") is True

    def test_empty_template_segment_is_skipped(self) -> None:
        assert is_compatible("/a//{b}", "/a/x/y") is True

    @pytest.mark.parametrize(
        ("template", "path"),
        [
            ("/{a}/{b}/{c}", "/1/2/3"),
            ("/x/{a}/y/{b}", "/x/1/y/2"),
            ("{a}", "anything"),
        ],
    )
    def test_aligned_captures(self, template: str, path: str) -> None:
        assert is_compatible(template, path) is True

    @pytest.mark.parametrize(
        ("template", "path"),
        [
            ("/{a}", "/1/2"),
            ("/{a}/{b}", "/1"),
            ("/x/{a}", "/"),
        ],
    )
    def test_differing_segment_counts_never_match(self, template: str, path: str) -> None:
        assert is_compatible(template, path) is False


class TestExtractParams:
    def test_single_capture(self) -> None:
        assert extract_params("/ahoy/{key}/hoya", "/ahoy/somevalue/hoya") == {"key": "somevalue"}

    def test_multiple_captures(self) -> None:
        params = extract_params("/users/{user_id}/posts/{post_id}", "/users/1/posts/42")
        assert params == {"user_id": "1", "post_id": "42"}

    def test_one_entry_per_capture(self) -> None:
        params = extract_params("/{a}/x/{b}/{c}", "/1/x/2/3")
        assert len(params) == 3
        assert set(params) == {"a", "b", "c"}

    def test_no_captures(self) -> None:
        assert extract_params("/users", "/users") == {}

    def test_segment_count_mismatch_raises(self) -> None:
        with pytest.raises(TemplateMismatchError) as exc_info:
            extract_params("/users/{id}", "/users/42/posts")
        assert exc_info.value.template == "/users/{id}"
        assert exc_info.value.path == "/users/42/posts"

    def test_literal_mismatch_raises(self) -> None:
        with pytest.raises(TemplateMismatchError):
            extract_params("/users/{id}", "/posts/42")

    def test_capture_facing_empty_segment_is_absent(self) -> None:
        assert extract_params("/users/{id}/posts", "/users//posts") == {}

    def test_value_kept_verbatim(self) -> None:
        assert extract_params("/q/{term}", "/q/Hello%20World") == {"term": "Hello%20World"}
