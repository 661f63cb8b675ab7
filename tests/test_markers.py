import pytest

from md_sentences.markers import extract_prefix_and_content, is_header, is_list_item
from md_sentences.models import PrefixedContent


@pytest.mark.parametrize(
    "trimmed",
    ["* item", "- item", "+ item", "1. item", "10. item", "3) item", "007. item", "- "],
)
def test_is_list_item_accepts_markers(trimmed):
    assert is_list_item(trimmed) is True


@pytest.mark.parametrize(
    "trimmed",
    ["*item", "-item", "1.item", "1.5 litres", "1)item", "a. item", ". item", "-", "", "# title"],
)
def test_is_list_item_rejects_non_markers(trimmed):
    assert is_list_item(trimmed) is False


def test_is_header():
    assert is_header("# Title") is True
    assert is_header("### Title") is True
    assert is_header("#Title") is False
    assert is_header("#") is False
    assert is_header("Title #") is False


@pytest.mark.parametrize(
    "line, prefix, content",
    [
        ("* First item. Second sentence.", "* ", "First item. Second sentence."),
        ("  - Nested item.", "  - ", "Nested item."),
        ("+ Plus.", "+ ", "Plus."),
        ("1. First item.", "1. ", "First item."),
        ("12) Twelfth.", "12) ", "Twelfth."),
        (" 3.  Two spaces.", " 3. ", " Two spaces."),
        ("# Header. Text.", "# ", "Header. Text."),
        ("  ### Deep header", "  ### ", "Deep header"),
        ("- ", "- ", ""),
    ],
)
def test_extract_prefix_and_content(line, prefix, content):
    split = extract_prefix_and_content(line)

    assert split == PrefixedContent(prefix=prefix, content=content)
    assert split.prefix + split.content == line


@pytest.mark.parametrize("line", ["Plain text.", "#hashtag", "1.5 litres", "> quote", ""])
def test_extract_prefix_and_content_without_marker(line):
    split = extract_prefix_and_content(line)

    assert split.prefix == ""
    assert split.content == line
