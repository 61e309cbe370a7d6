from typing import Any

import pytest
from inline_snapshot import snapshot

from headwind import CacheControl, RawHeaders, Vary, iter_directive_spans, parse_cache_control, split_directive


class TestRawHeaders:
    def test_lookup_is_case_insensitive(self):
        headers = RawHeaders({"Cache-Control": "no-store"})
        assert headers["cache-control"] == "no-store"
        assert headers["CACHE-CONTROL"] == "no-store"
        assert "cAcHe-CoNtRoL" in headers

    def test_repeated_lines_keep_arrival_order(self):
        headers = RawHeaders([("Vary", "Accept"), ("Date", "x"), ("VARY", "Cookie")])
        assert headers.get_list("vary") == ["Accept", "Cookie"]
        assert headers["Vary"] == "Accept, Cookie"
        assert headers.get_last("Vary") == "Cookie"

    def test_names_keep_original_case(self):
        headers = RawHeaders()
        headers.add("ETag", '"v1"')
        headers.add("etag", '"v2"')
        assert list(headers) == ["ETag"]
        assert headers.multi_items() == [("ETag", '"v1"'), ("etag", '"v2"')]

    def test_mapping_with_list_values(self):
        headers = RawHeaders({"Cache-Control": ["no-store", "max-age=60"], "Pragma": "no-cache"})
        assert headers.multi_items() == snapshot(
            [("Cache-Control", "no-store"), ("Cache-Control", "max-age=60"), ("Pragma", "no-cache")]
        )
        assert len(headers) == 2

    def test_missing_header(self):
        headers = RawHeaders()
        assert headers.get_list("Date") == []
        assert headers.get_last("Date") is None
        with pytest.raises(KeyError):
            headers["Date"]

    def test_setitem_replaces_every_line(self):
        headers = RawHeaders([("Vary", "Accept"), ("vary", "Cookie")])
        headers["VARY"] = "*"
        assert headers.multi_items() == [("VARY", "*")]

    def test_delitem(self):
        headers = RawHeaders([("Vary", "Accept"), ("Date", "x"), ("vary", "Cookie")])
        del headers["vary"]
        assert headers.multi_items() == [("Date", "x")]
        with pytest.raises(KeyError):
            del headers["vary"]

    def test_copy_from_raw_headers(self):
        original = RawHeaders([("Vary", "Accept")])
        copy = RawHeaders(original)
        copy.add("Vary", "Cookie")
        assert original.get_list("Vary") == ["Accept"]

    def test_equality_ignores_name_case(self):
        assert RawHeaders([("ETag", "v1")]) == RawHeaders([("etag", "v1")])
        assert RawHeaders([("ETag", "v1")]) != RawHeaders([("ETag", "v2")])


class TestDirectiveSpans:
    @pytest.mark.parametrize(
        "value, tokens",
        [
            ("no-store, max-age=60, public", ["no-store", " max-age=60", " public"]),
            ('private=" a, no-cache, c ", no-store', ['private=" a, no-cache, c "', " no-store"]),
            ('private="a, no-cache, c', ['private="a, no-cache, c']),
            ("public,", ["public", ""]),
            ("", [""]),
        ],
    )
    def test_commas_inside_quotes_do_not_split(self, value: str, tokens: Any):
        assert [value[start:end] for start, end in iter_directive_spans(value)] == tokens


class TestSplitDirective:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("no-store", ("no-store", None)),
            ("  MAX-AGE=60 ", ("max-age", "60")),
            ("max-age =60", ("max-age", "60")),
            ('max-age= "60"', ("max-age", "60")),
            ("max-age= 60", ("max-age", "60")),
            ("private=", ("private", "")),
            ('private="Set-Cookie"', ("private", "Set-Cookie")),
            ('private="a, b', ("private", "a, b")),
            ('private=" a "', ("private", " a ")),
            ("\tpublic\t", ("public", None)),
        ],
    )
    def test_split(self, token: str, expected: Any):
        assert split_directive(token) == expected

    def test_blank_token(self):
        assert split_directive("   ") is None


class TestParseCacheControl:
    def test_none(self):
        assert parse_cache_control(None) == CacheControl()

    def test_empty_string(self):
        cc = parse_cache_control("")
        assert cc.max_age == -1
        assert cc.no_cache is False
        assert cc.private_field is None

    def test_comma_separated_directives(self):
        cc = parse_cache_control("no-store, max-age=60, public")
        assert cc.no_store is True
        assert cc.max_age == 60
        assert cc.public is True

    def test_repeated_lines_form_one_list(self):
        cc = parse_cache_control(["no-store", "max-age=60", "PUBLIC"])
        assert cc == snapshot(CacheControl(no_store=True, public=True, max_age=60))

    def test_later_directive_wins(self):
        cc = parse_cache_control(["max-age=60", "max-age=120"])
        assert cc.max_age == 120

    def test_quoted_private_field(self):
        cc = parse_cache_control('private="Set-Cookie"')
        assert cc.is_private is True
        assert cc.private_field == "Set-Cookie"

    def test_bare_private(self):
        cc = parse_cache_control("private")
        assert cc.is_private is True
        assert cc.private_field is None

    def test_no_cache_with_field_names(self):
        cc = parse_cache_control('no-cache="Set-Cookie, Authorization"')
        assert cc.no_cache is True
        assert cc.no_cache_field == "Set-Cookie, Authorization"

    def test_dangling_quote_swallows_the_rest(self):
        cc = parse_cache_control('private="a, no-cache, c')
        assert cc.private_field == "a, no-cache, c"
        assert cc.no_cache is False

    def test_dangling_quote_ends_with_its_line(self):
        cc = parse_cache_control(['private="a, no-cache', "no-store"])
        assert cc.private_field == "a, no-cache"
        assert cc.no_store is True
        assert cc.no_cache is False

    def test_request_only_directives(self):
        cc = parse_cache_control("max-stale=70, min-fresh=80, only-if-cached, no-transform")
        assert cc.max_stale == 70
        assert cc.min_fresh == 80
        assert cc.only_if_cached is True
        assert cc.no_transform is True

    def test_s_maxage_and_must_revalidate(self):
        cc = parse_cache_control("s-maxage=70, must-revalidate")
        assert cc.s_maxage == 70
        assert cc.must_revalidate is True

    def test_boolean_directive_with_value_still_counts(self):
        cc = parse_cache_control("no-store=1")
        assert cc.no_store is True

    @pytest.mark.parametrize(
        "value, max_age",
        [
            ("max-age=0", 0),
            ("max-age=2147483648", 2147483647),
            ("max-age=99999999999999999999999", 2147483647),
            ("max-age=-2", 0),
            ("max-age=pi", -1),
            ("max-age", -1),
            ("max-age=", -1),
            ("max-age=1_000", -1),
            ("max-age=+5", 5),
        ],
    )
    def test_seconds_values(self, value: str, max_age: int):
        assert parse_cache_control(value).max_age == max_age

    def test_unknown_directives_are_kept_as_extensions(self, caplog: Any):
        with caplog.at_level("DEBUG", logger="headwind.core.headers"):
            cc = parse_cache_control("immutable, stale-while-revalidate=30, public")

        assert cc.public is True
        assert cc.extensions == ("immutable", "stale-while-revalidate=30")
        assert caplog.record_tuples == snapshot(
            [
                ("headwind.core.headers", 10, "Ignoring unrecognized cache directive 'immutable'"),
                ("headwind.core.headers", 10, "Ignoring unrecognized cache directive 'stale-while-revalidate'"),
            ]
        )

    def test_nameless_directive_is_skipped(self, caplog: Any):
        with caplog.at_level("DEBUG", logger="headwind.core.headers"):
            cc = parse_cache_control("=60, public")

        assert cc == CacheControl(public=True)
        assert caplog.messages == ["Skipping a cache directive without a name: '=60'"]

    def test_garbage_never_raises(self):
        cc = parse_cache_control(',,, "", =, ==, max-age="\x00", "')
        assert cc.max_age == -1
        assert cc.no_store is False


def test_single_vary_header():
    vary = Vary.from_values(["Accept, Location"])
    assert vary.values == ["Accept", "Location"]


def test_multiple_vary_headers_with_multiple_values():
    vary = Vary.from_values(["Accept, Location", "Transfer-Encoding", " , "])
    assert vary.values == ["Accept", "Location", "Transfer-Encoding"]
