"""Unit tests for link fanout and search URL construction."""

from urllib.parse import parse_qs, parse_qsl, urlsplit

import pytest

from phrase_search_service.config import DEFAULT_SEARCH_URL_TEMPLATES
from phrase_search_service.variations import (
    FanoutPolicy,
    LinkFanout,
    SearchLink,
    TemplateParseError,
    build_search_url,
)

VARIATIONS = ["fast car", "quick car", "rapid car", "fast auto"]


def decoded_q(url: str) -> str:
    return parse_qs(urlsplit(url).query, keep_blank_values=True)["q"][0]


class TestBuildSearchUrl:
    """Tests for build_search_url function."""

    def test_fills_empty_q(self) -> None:
        url = build_search_url("https://www.gileq.com/dsr?q=", "fast car")
        assert url == "https://www.gileq.com/dsr?q=fast+car"

    def test_trailing_slash_path_kept(self) -> None:
        url = build_search_url("https://www.astartex.com/dsr/?q=", "fast")
        assert url == "https://www.astartex.com/dsr/?q=fast"

    def test_appends_q_when_absent(self) -> None:
        url = build_search_url("https://example.com/search", "fast")
        assert url == "https://example.com/search?q=fast"

    def test_overwrites_existing_q_and_keeps_other_params(self) -> None:
        url = build_search_url("https://example.com/s?lang=en&q=old&page=1", "new")
        assert parse_qsl(urlsplit(url).query) == [("lang", "en"), ("q", "new"), ("page", "1")]

    def test_duplicate_q_collapsed(self) -> None:
        url = build_search_url("https://example.com/s?q=a&q=b", "c")
        assert urlsplit(url).query == "q=c"

    def test_fragment_preserved(self) -> None:
        url = build_search_url("https://example.com/s?q=#results", "x")
        assert url == "https://example.com/s?q=x#results"

    @pytest.mark.parametrize(
        "value",
        ["fast car", "a&b=c", "50% off?", "café crème", "plus+sign", "#hash"],
    )
    def test_q_decodes_to_value(self, value: str) -> None:
        url = build_search_url("https://www.gileq.com/dsr?q=", value)
        assert decoded_q(url) == value

    @pytest.mark.parametrize(
        "template",
        ["not a url", "/relative/path?q=", "https://[invalid/dsr?q=", ""],
    )
    def test_malformed_template_raises(self, template: str) -> None:
        with pytest.raises(TemplateParseError) as exc_info:
            build_search_url(template, "fast")
        assert exc_info.value.template == template


class TestIndexedPolicy:
    """Variation i pairs with template i mod N."""

    def test_one_link_per_variation(self) -> None:
        fanout = LinkFanout(list(DEFAULT_SEARCH_URL_TEMPLATES), FanoutPolicy.INDEXED)

        links = fanout.fanout(VARIATIONS)

        assert len(links) == len(VARIATIONS)
        assert [link.title for link in links] == VARIATIONS
        for i, link in enumerate(links):
            assert link.url == build_search_url(DEFAULT_SEARCH_URL_TEMPLATES[i], VARIATIONS[i])

    def test_wraps_around_templates(self) -> None:
        fanout = LinkFanout(["https://a.example/s", "https://b.example/s"])

        links = fanout.fanout(["v0", "v1", "v2", "v3", "v4"])

        hosts = [urlsplit(link.url).netloc for link in links]
        assert hosts == ["a.example", "b.example", "a.example", "b.example", "a.example"]

    def test_empty_variations(self) -> None:
        assert LinkFanout(["https://a.example/s"]).fanout([]) == []

    def test_default_policy_is_indexed(self) -> None:
        assert LinkFanout(["https://a.example/s"]).policy is FanoutPolicy.INDEXED


class TestCrossProductPolicy:
    """Every variation pairs with every template."""

    def test_link_count(self) -> None:
        fanout = LinkFanout(list(DEFAULT_SEARCH_URL_TEMPLATES), FanoutPolicy.CROSS_PRODUCT)

        links = fanout.fanout(VARIATIONS)

        assert len(links) == len(VARIATIONS) * len(DEFAULT_SEARCH_URL_TEMPLATES)

    def test_grouped_by_variation(self) -> None:
        templates = ["https://a.example/s", "https://b.example/s"]
        fanout = LinkFanout(templates, FanoutPolicy.CROSS_PRODUCT)

        links = fanout.fanout(["one", "two"])

        assert links == [
            SearchLink("one", "https://a.example/s?q=one"),
            SearchLink("one", "https://b.example/s?q=one"),
            SearchLink("two", "https://a.example/s?q=two"),
            SearchLink("two", "https://b.example/s?q=two"),
        ]

    def test_every_q_matches_title(self) -> None:
        fanout = LinkFanout(list(DEFAULT_SEARCH_URL_TEMPLATES), FanoutPolicy.CROSS_PRODUCT)

        for link in fanout.fanout(VARIATIONS):
            assert decoded_q(link.url) == link.title

    def test_policy_accepts_string_value(self) -> None:
        fanout = LinkFanout(["https://a.example/s"], "cross_product")
        assert fanout.policy is FanoutPolicy.CROSS_PRODUCT


class TestMalformedTemplates:
    """A malformed template drops only its own links."""

    def test_indexed_skips_only_bad_link(self) -> None:
        fanout = LinkFanout(["https://a.example/s", "::bad::", "https://c.example/s"])

        links = fanout.fanout(["v0", "v1", "v2"])

        assert [link.title for link in links] == ["v0", "v2"]

    def test_cross_product_skips_bad_template_for_each_variation(self) -> None:
        fanout = LinkFanout(["https://a.example/s", "::bad::"], FanoutPolicy.CROSS_PRODUCT)

        links = fanout.fanout(["v0", "v1"])

        assert links == [
            SearchLink("v0", "https://a.example/s?q=v0"),
            SearchLink("v1", "https://a.example/s?q=v1"),
        ]

    def test_all_templates_bad(self) -> None:
        fanout = LinkFanout(["::bad::"])
        assert fanout.fanout(["v0", "v1"]) == []


class TestLinkFanoutConstruction:
    def test_requires_templates(self) -> None:
        with pytest.raises(ValueError, match="template"):
            LinkFanout([])

    def test_templates_copied(self) -> None:
        templates = ["https://a.example/s"]
        fanout = LinkFanout(templates)
        templates.append("https://b.example/s")

        assert fanout.templates == ("https://a.example/s",)

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValueError):
            LinkFanout(["https://a.example/s"], "round_robin")


class TestGroup:
    def test_groups_in_first_seen_order(self) -> None:
        links = [
            SearchLink("a", "u1"),
            SearchLink("b", "u2"),
            SearchLink("a", "u3"),
        ]

        assert LinkFanout.group(links) == [("a", ["u1", "u3"]), ("b", ["u2"])]
