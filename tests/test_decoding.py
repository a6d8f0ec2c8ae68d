from __future__ import annotations

import pytest

from planner_proxy.core.decoding import decode_structured_text, strip_code_fence


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('```\n{"a": 1}\n```', '{"a": 1}'),
        ('  ```JSON\n[1, 2]\n```\n', "[1, 2]"),
        ('```json {"a": 1}```', '{"a": 1}'),
        ('{"a": 1}', '{"a": 1}'),
        ("plain text", "plain text"),
    ],
)
def test_strip_code_fence(raw: str, expected: str):
    assert strip_code_fence(raw) == expected


def test_decode_fenced_json():
    result = decode_structured_text('```json\n{"steps":["a","b"]}\n```')

    assert result.ok
    assert result.value == {"steps": ["a", "b"]}
    assert result.error is None


def test_decode_failure_is_reported_not_raised():
    result = decode_structured_text("not json")

    assert not result.ok
    assert result.value is None
    assert result.error


def test_decode_with_substituted_normalizers():
    def drop_preamble(text: str) -> str:
        return text[text.index("{") :]

    raw = 'Here is your plan: {"steps": []}'

    assert not decode_structured_text(raw).ok
    assert decode_structured_text(raw, normalizers=(drop_preamble,)).value == {"steps": []}


def test_decode_deeply_nested_text_is_reported_not_raised():
    result = decode_structured_text("[" * 100000 + "]" * 100000)

    assert not result.ok
    assert result.error


def test_decode_failing_normalizer_is_reported_not_raised():
    def drop_preamble(text: str) -> str:
        return text[text.index("{") :]

    result = decode_structured_text("not json", normalizers=(drop_preamble,))

    assert not result.ok
    assert "substring not found" in result.error
