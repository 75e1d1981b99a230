import pytest

from scripts.helpers import extract_clean_json


def test_plain_json():
    assert extract_clean_json('{"calories": 300}') == {"calories": 300}


def test_fenced_json():
    raw = 'Here you go:\n```json\n{"calories": 300, "fat": 4}\n```'
    assert extract_clean_json(raw) == {"calories": 300, "fat": 4}


@pytest.mark.parametrize("raw", ["", "not json", "[1, 2]"])
def test_bad_output_raises(raw):
    with pytest.raises(ValueError):
        extract_clean_json(raw)
