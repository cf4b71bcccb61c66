"""
tests/test_parser.py
"""

import json

import pytest

from app.errors import ParseError
from app.parser import parse_recommendations, parse_titles
from conftest import make_titles


class TestParseTitles:
    def test_decodes_three_categories(self):
        titles = parse_titles(json.dumps(make_titles()))

        assert set(titles.categories()) == {"info", "tips", "hotspots"}
        assert len(titles.info) == len(titles.tips) == len(titles.hotspots) == 20
        assert titles.info[0] == "Title info 1"

    def test_extra_keys_are_ignored(self):
        data = make_titles(n=2)
        data["notes"] = "from the model"
        assert parse_titles(json.dumps(data)).total() == 6

    def test_lenient_count_by_default(self):
        assert parse_titles(json.dumps(make_titles(n=3))).total() == 9

    def test_strict_count(self):
        with pytest.raises(ParseError, match="expected 20 entries in info"):
            parse_titles(json.dumps(make_titles(n=3)), expected_count=20)

    @pytest.mark.parametrize(
        "text",
        [
            "Here are some great titles for your blog!",
            "",
            '["a", "b"]',
            '{"info": [], "tips": []}',
            '{"info": [1, 2], "tips": [], "hotspots": []}',
            '{"info": "one", "tips": [], "hotspots": []}',
            '{"info": [], "tips": [], "hotspots": [',
        ],
    )
    def test_bad_text_raises(self, text):
        with pytest.raises(ParseError):
            parse_titles(text)

    def test_deeply_nested_json_raises_parse_error(self):
        with pytest.raises(ParseError, match="not valid JSON"):
            parse_titles("[" * 200000 + "]" * 200000)

    def test_reason_names_missing_key(self):
        with pytest.raises(ParseError, match="hotspots"):
            parse_titles('{"info": [], "tips": []}')


class TestParseRecommendations:
    def test_decodes_list(self):
        assert parse_recommendations('["Da Nang", "Cebu", "Bali", "Phuket", "Penang"]') == [
            "Da Nang",
            "Cebu",
            "Bali",
            "Phuket",
            "Penang",
        ]

    def test_strict_count(self):
        with pytest.raises(ParseError, match="expected 5"):
            parse_recommendations('["Seoul", "Tokyo"]', expected_count=5)

    def test_deeply_nested_json_raises_parse_error(self):
        with pytest.raises(ParseError, match="not valid JSON"):
            parse_recommendations("[" * 200000 + "]" * 200000)

    @pytest.mark.parametrize(
        "text",
        ["Seoul and Tokyo", '{"cities": ["Seoul"]}', '"Seoul"', '["Seoul", 3]', "[null]"],
    )
    def test_bad_text_raises(self, text):
        with pytest.raises(ParseError):
            parse_recommendations(text)
