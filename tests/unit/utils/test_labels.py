import pytest

from triviacli.utils.labels import category_name_keys, decode_html_entities, normalize_category_label


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Science &amp; Nature", "Science & Nature"),
        ("&quot;Quoted&quot; &#039;text&#039;", "\"Quoted\" 'text'"),
        ("Plain", "Plain"),
        (None, ""),
    ],
)
def test_decode_html_entities(raw, expected):
    assert decode_html_entities(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Science & Nature", "science&nature"),
        ("Science &amp; Nature", "science&nature"),
        ("Entertainment:Video   Games", "entertainment: video games"),
        ("  Animals  ", "animals"),
        (None, ""),
    ],
)
def test_normalize_category_label(raw, expected):
    assert normalize_category_label(raw) == expected


def test_category_name_keys_include_child_segment():
    assert category_name_keys("Entertainment: Video Games") == ["entertainment: video games", "video games"]


def test_category_name_keys_without_colon():
    assert category_name_keys("Animals") == ["animals"]
