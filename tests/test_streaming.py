"""Tests for streamed response draining and JSON object extraction."""

import pytest

from resume_builder.errors import ErrorKind, ParseError
from resume_builder.services.streaming import drain_stream, extract_json_object, find_json_object


async def _aiter(chunks):
    for chunk in chunks:
        yield chunk


class TestDrainStream:
    @pytest.mark.asyncio
    async def test_concatenates_byte_chunks(self):
        text = await drain_stream(_aiter([b'{"sum', b'mary": ', b'"X"}']))
        assert text == '{"summary": "X"}'

    @pytest.mark.asyncio
    async def test_decodes_multibyte_character_split_across_chunks(self):
        data = "résumé".encode("utf-8")
        # split inside the two-byte "é"
        text = await drain_stream(_aiter([data[:2], data[2:]]))
        assert text == "résumé"

    @pytest.mark.asyncio
    async def test_accepts_text_chunks(self):
        text = await drain_stream(_aiter(["a", "b", "c"]))
        assert text == "abc"

    @pytest.mark.asyncio
    async def test_empty_stream(self):
        assert await drain_stream(_aiter([])) == ""


class TestExtractJsonObject:
    def test_prefix_and_suffix_noise(self):
        text = 'prefix noise {"summary":"X"} suffix noise'
        assert extract_json_object(text) == {"summary": "X"}

    def test_no_braces_is_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            extract_json_object("no json here")
        assert exc_info.value.kind is ErrorKind.PARSE

    def test_takes_first_balanced_object(self):
        text = 'x {"a": {"b": 1}} y {"c": 2}'
        assert extract_json_object(text) == {"a": {"b": 1}}

    def test_braces_inside_strings_are_ignored(self):
        text = 'reply: {"a": "}{", "b": "quote \\" {"} trailing }'
        assert extract_json_object(text) == {"a": "}{", "b": 'quote " {'}

    def test_unbalanced_object_is_parse_error(self):
        with pytest.raises(ParseError):
            extract_json_object('{"a": 1')

    def test_closing_before_opening_is_parse_error(self):
        with pytest.raises(ParseError):
            extract_json_object("} nothing {")

    def test_invalid_json_region_is_parse_error(self):
        with pytest.raises(ParseError):
            extract_json_object("{not json}")

    def test_find_returns_slice_bounds(self):
        text = 'ab{"k": 1}cd'
        start, end = find_json_object(text)
        assert text[start:end] == '{"k": 1}'
