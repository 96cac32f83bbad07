import pytest

from labstyle.adapters.markdown import parse
from labstyle.rules_engine.errors import ParseError
from labstyle.rules_engine.models import BlockKind, LineRange


def test_parse_conformant_lab_block_sequence(conformant_lab):
    blocks = parse(conformant_lab)
    assert [b.kind for b in blocks] == [
        BlockKind.YAML_HEADER,
        BlockKind.HEADER,
        BlockKind.PARAGRAPH,
        BlockKind.HEADER,
        BlockKind.PARAGRAPH,
        BlockKind.LIST_ITEM,
        BlockKind.CODE_BLOCK,
        BlockKind.ANNOTATION,
        BlockKind.HEADER,
        BlockKind.PARAGRAPH,
    ]
    assert blocks[0].line_range == LineRange(start=1, end=4)
    assert blocks[2].line_range == LineRange(start=8, end=9)
    assert [b.level for b in blocks if b.kind == BlockKind.HEADER] == [1, 2, 3]


def test_parse_code_fence_language_from_info_string(make_doc):
    text = make_doc(
        """\
        ```python
        print("hi")
        ```

        ```{r, echo=FALSE}
        x <- 1
        ```

        ~~~
        plain
        ~~~
        """
    )
    blocks = parse(text)
    assert [b.kind for b in blocks] == [BlockKind.CODE_BLOCK] * 3
    assert [b.language for b in blocks] == ["python", "r", None]
    assert blocks[0].line_range == LineRange(start=1, end=3)


def test_parse_code_block_keeps_markdown_like_lines_inside():
    text = "```r\n# not a header\n- not a list\n```\n"
    blocks = parse(text)
    assert len(blocks) == 1
    assert blocks[0].kind == BlockKind.CODE_BLOCK
    assert "# not a header" in blocks[0].raw_text


def test_parse_unterminated_fence_reports_opening_line():
    text = "# Title\n\nSome text.\n\n```r\nx <- 1\n"
    with pytest.raises(ParseError) as excinfo:
        parse(text)
    assert excinfo.value.line == 5
    assert str(excinfo.value) == "document could not be parsed: unterminated code fence at line 5"


def test_parse_closing_fence_must_match_character_and_length():
    text = "````r\n```\nstill code\n````\n"
    blocks = parse(text)
    assert len(blocks) == 1
    assert blocks[0].line_range == LineRange(start=1, end=4)

    with pytest.raises(ParseError):
        parse("```r\nx\n~~~\n")


def test_parse_groups_contiguous_list_items_into_one_block(make_doc):
    text = make_doc(
        """\
        Intro text.

        - first
        - second
          continued
        1. third

        - new run
        """
    )
    blocks = parse(text)
    assert [b.kind for b in blocks] == [BlockKind.PARAGRAPH, BlockKind.LIST_ITEM, BlockKind.LIST_ITEM]
    assert blocks[1].line_range == LineRange(start=3, end=6)
    assert blocks[2].line_range == LineRange(start=8, end=8)


def test_parse_list_interrupts_paragraph_without_blank_line():
    blocks = parse("Steps to follow:\n- one\n- two\nAfter the list.\n")
    assert [b.kind for b in blocks] == [BlockKind.PARAGRAPH, BlockKind.LIST_ITEM, BlockKind.PARAGRAPH]
    assert [b.line_range.start for b in blocks] == [1, 2, 4]


def test_parse_annotation_only_after_annotated_code_block(make_doc):
    text = make_doc(
        """\
        ```r
        x <- 1 # <1>
        ```
        1. Assign x.

        ```r
        y <- 2
        ```

        1. Just a list.
        """
    )
    blocks = parse(text)
    assert [b.kind for b in blocks] == [
        BlockKind.CODE_BLOCK,
        BlockKind.ANNOTATION,
        BlockKind.CODE_BLOCK,
        BlockKind.LIST_ITEM,
    ]


def test_parse_unclosed_front_matter_is_ordinary_content():
    blocks = parse("---\ntitle: x\n")
    assert all(b.kind != BlockKind.YAML_HEADER for b in blocks)
    assert blocks[0].line_range.start == 1


def test_parse_hash_without_space_is_paragraph_text():
    blocks = parse("#hashtag is not a header\n")
    assert [b.kind for b in blocks] == [BlockKind.PARAGRAPH]


def test_parse_returns_fresh_blocks_each_call(conformant_lab):
    first = parse(conformant_lab)
    second = parse(conformant_lab)
    assert first == second
    assert first is not second


def test_parse_handles_crlf_and_empty_input():
    assert parse("") == ()
    blocks = parse("# Title\r\n\r\nText.\r\n")
    assert [b.kind for b in blocks] == [BlockKind.HEADER, BlockKind.PARAGRAPH]
    assert blocks[1].line_range.start == 3
