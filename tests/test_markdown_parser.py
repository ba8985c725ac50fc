from guide_mcp.docs.markdown import UNTITLED, MarkdownParser
from guide_mcp.docs.models import ApiEndpoint

FENCE = "```"


# ── Sections ─────────────────────────────────────────────


def test_sections_split_on_every_heading_level() -> None:
    text = "intro dropped\n# Top\nalpha\n## Child\nbeta\ngamma\n# Next\ndelta"
    sections = MarkdownParser.extract_sections(text)

    assert [(s.level, s.title) for s in sections] == [(1, "Top"), (2, "Child"), (1, "Next")]
    assert sections[0].content == "alpha"
    assert sections[1].content == "beta\ngamma"
    assert sections[2].content == "delta"
    assert (sections[0].line_start, sections[0].line_end) == (1, 2)
    assert (sections[2].line_start, sections[2].line_end) == (6, 7)


def test_sections_rejoin_to_input_after_first_heading() -> None:
    text = "preamble\n\n# Guide\nline one\n\n## Setup\n- step\n### Deep\ntext\n# Tail\nend\n"
    sections = MarkdownParser.extract_sections(text)

    rebuilt = "\n".join(f"{'#' * s.level} {s.title}\n{s.content}" for s in sections)
    assert rebuilt == text[text.index("# Guide"):]


def test_heading_requires_space_and_text() -> None:
    text = "#NoSpace\n#\n####### seven\n#   \n## Real"
    sections = MarkdownParser.extract_sections(text)

    assert [s.title for s in sections] == ["Real"]


def test_first_heading_is_title_whatever_its_level() -> None:
    title, sections = MarkdownParser.split_into_sections("### Sub First\n# Main\nbody")

    assert title == "Sub First"
    assert [s.level for s in sections] == [3, 1]


def test_untitled_document_has_no_sections() -> None:
    title, sections = MarkdownParser.split_into_sections("just text\nno headings")

    assert title == UNTITLED
    assert sections == []


def test_generate_anchor() -> None:
    assert MarkdownParser.generate_anchor("Request Spec (v2)!") == "request-spec-v2"
    assert MarkdownParser.generate_anchor(" - Leading  and trailing - ") == "leading-and-trailing"
    assert MarkdownParser.generate_anchor("결제 승인 API") == "결제-승인-api"


def test_find_sections_by_keyword_checks_title_and_content() -> None:
    text = "# Payment\nApprove flow\n# Refund\nuses cancel API\n# Other\nnothing"
    titles = [s.title for s in MarkdownParser.find_sections_by_keyword(text, "CANCEL")]
    assert titles == ["Refund"]

    titles = [s.title for s in MarkdownParser.find_sections_by_keyword(text, "pay")]
    assert titles == ["Payment"]


# ── Code blocks ──────────────────────────────────────────


def test_code_blocks_capture_language_and_line_span() -> None:
    text = "\n".join(
        [
            "# Title",
            f"{FENCE}javascript",
            "const a = 1;",
            "const b = 2;",
            FENCE,
            "text",
            FENCE,
            "plain",
            FENCE,
        ]
    )
    blocks = MarkdownParser.extract_code_blocks(text)

    assert len(blocks) == 2
    assert blocks[0].language == "javascript"
    assert blocks[0].code == "const a = 1;\nconst b = 2;"
    assert (blocks[0].line_start, blocks[0].line_end) == (1, 3)
    assert blocks[1].language is None
    assert blocks[1].code == "plain"
    for block in blocks:
        assert block.line_end >= block.line_start
        assert FENCE not in block.code


def test_fence_like_lines_inside_block_are_content() -> None:
    text = f"{FENCE}markdown\n{FENCE}python\nprint(1)\n{FENCE}\nafter"
    blocks = MarkdownParser.extract_code_blocks(text)

    assert len(blocks) == 1
    assert blocks[0].language == "markdown"
    assert blocks[0].code == f"{FENCE}python\nprint(1)"


def test_unterminated_block_with_content_is_kept() -> None:
    blocks = MarkdownParser.extract_code_blocks(f"intro\n{FENCE}bash\necho hi\necho bye")

    assert len(blocks) == 1
    assert blocks[0].code == "echo hi\necho bye"
    assert (blocks[0].line_start, blocks[0].line_end) == (1, 3)


def test_unterminated_empty_block_is_dropped() -> None:
    assert MarkdownParser.extract_code_blocks(f"intro\n{FENCE}bash") == []


def test_opening_fence_with_two_words_is_not_a_block() -> None:
    assert MarkdownParser.extract_code_blocks(f"{FENCE}js title\nx") == []


def test_code_blocks_by_language_match_loosely() -> None:
    text = f"{FENCE}javascript\na\n{FENCE}\n{FENCE}python\nb\n{FENCE}\n{FENCE}\nc\n{FENCE}"

    assert [b.code for b in MarkdownParser.extract_code_blocks_by_language(text, "JAVA")] == ["a"]
    assert [b.code for b in MarkdownParser.extract_code_blocks_by_language(text, "python3")] == ["b"]
    assert MarkdownParser.extract_code_blocks_by_language(text, "go") == []


def test_find_api_code_examples() -> None:
    text = "\n".join(
        [
            f"{FENCE}bash",
            "curl https://example.com",
            FENCE,
            f"{FENCE}python",
            "x = 1",
            FENCE,
            f"{FENCE}text",
            "host: sandbox-api.nicepay.co.kr",
            FENCE,
        ]
    )
    examples = MarkdownParser.find_api_code_examples(text)

    assert [b.language for b in examples] == ["bash", "text"]
    assert [b.language for b in MarkdownParser.find_api_code_examples(text, "python")] == []


# ── Tables ───────────────────────────────────────────────


def test_table_rows_skip_separator() -> None:
    text = "| Name | Type |\n|---|---|\n| amount | Int |\n| orderId | String |"
    tables = MarkdownParser.extract_tables(text)

    assert len(tables) == 1
    table = tables[0]
    assert table.headers == ["Name", "Type"]
    assert [row.values() for row in table.rows] == [["amount", "Int"], ["orderId", "String"]]
    assert all(not cell.is_header for row in table.rows for cell in row.cells)
    assert table.raw == text


def test_header_and_separator_only_table_has_no_rows() -> None:
    tables = MarkdownParser.extract_tables("text\n| A | B |\n|---|---|\nmore text")

    assert len(tables) == 1
    assert tables[0].headers == ["A", "B"]
    assert tables[0].rows == []


def test_header_only_table_is_not_parsed() -> None:
    assert MarkdownParser.extract_tables("| A | B |\nplain text") == []


def test_single_line_run_does_not_merge_into_next_table() -> None:
    text = "| stray |\n\nparagraph\n\n| X | Y |\n|---|---|\n| 1 | 2 |"
    tables = MarkdownParser.extract_tables(text)

    assert len(tables) == 1
    assert tables[0].headers == ["X", "Y"]


def test_lenient_continuation_and_empty_cells() -> None:
    text = "| A | B | C |\n|---|---|---|\n| 1 |  | 3 |\n| 4 | 5"
    table = MarkdownParser.extract_tables(text)[0]

    assert [row.values() for row in table.rows] == [["1", "3"], ["4", "5"]]


def test_open_ended_line_cannot_start_a_table() -> None:
    tables = MarkdownParser.extract_tables("| A | B\n|---|---|\n| 1 | 2 |")

    assert len(tables) == 1
    assert tables[0].headers == ["---", "---"]
    assert tables[0].rows == []
    assert not tables[0].raw.startswith("| A")


def test_two_tables_separated_by_text() -> None:
    text = "| A |\n|---|\n| 1 |\n\nbetween\n\n| B |\n|---|\n| 2 |"
    tables = MarkdownParser.extract_tables(text)

    assert [t.headers for t in tables] == [["A"], ["B"]]


def test_find_table_column() -> None:
    table = MarkdownParser.extract_tables("| 파라미터 | 필수 |\n|---|---|\n| amount | O |\n| memo |")[0]

    assert MarkdownParser.find_table_column(table, "파라미터") == ["amount", "memo"]
    assert MarkdownParser.find_table_column(table, "필수") == ["O"]
    assert MarkdownParser.find_table_column(table, "missing") == []


def test_extract_api_endpoints_returns_complete_rows() -> None:
    text = (
        "| API | Method | Endpoint |\n"
        "|---|---|---|\n"
        "| 결제 승인 | POST | /v1/payments/{tid} |\n"
        "| 미완성 |  | /v1/broken |\n"
    )

    assert MarkdownParser.extract_api_endpoints(text) == [
        ApiEndpoint(api="결제 승인", method="POST", endpoint="/v1/payments/{tid}")
    ]


def test_extract_api_endpoints_accepts_korean_and_url_headers() -> None:
    text = "| 기능 | HTTP Method | URL |\n|---|---|---|\n| 취소 | POST | /v1/cancel |"

    endpoints = MarkdownParser.extract_api_endpoints(text)
    assert [e.to_dict() for e in endpoints] == [{"api": "취소", "method": "POST", "endpoint": "/v1/cancel"}]


def test_extract_api_endpoints_ignores_other_tables() -> None:
    text = "| Name | Type |\n|---|---|\n| amount | Int |"
    assert MarkdownParser.extract_api_endpoints(text) == []


# ── Links ────────────────────────────────────────────────


def test_inline_and_reference_links() -> None:
    text = (
        'See [approve](/api/payment#approve "Approve API") and [cancel](/api/cancel).\n'
        "Also [the SDK][sdk] and [missing][nowhere].\n"
        "\n"
        "[sdk]: https://example.com/sdk\n"
    )
    links = MarkdownParser.extract_links(text)

    assert [(link.text, link.url, link.title) for link in links] == [
        ("approve", "/api/payment#approve", "Approve API"),
        ("cancel", "/api/cancel", None),
        ("the SDK", "https://example.com/sdk", None),
    ]


def test_inline_link_target_with_spaces_is_kept_raw() -> None:
    links = MarkdownParser.extract_links("[b](my doc.md) and [a](/x 'T') and [c]( /y )")

    assert [(link.text, link.url, link.title) for link in links] == [
        ("b", "my doc.md", None),
        ("a", "/x 'T'", None),
        ("c", "/y", None),
    ]
