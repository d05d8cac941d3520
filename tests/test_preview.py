import logging

from writecore.logger import LOG_FILE_NAME, setup_logging, get_logger
from writecore.markdown import render_markdown, inline_fragments
from writecore.spelling import SpellCheck


def plain(fragments):
    return "".join(text for _, text in fragments)


def test_header_is_styled_without_hashes():
    fragments = render_markdown("## Chapter One")
    assert fragments[0] == ("class:md.header", "Chapter One")


def test_paragraph_lines_are_joined():
    assert plain(render_markdown("one\ntwo\n\nthree")) == "one two\n\nthree\n\n"


def test_list_items_get_bullets():
    assert plain(render_markdown("- apples\n* pears\n1. plums")) == "• apples\n• pears\n• plums\n"


def test_quote_lines_are_styled():
    fragments = render_markdown("> said so")
    assert ("class:md.quote", "said so") in fragments


def test_inline_styles():
    fragments = inline_fragments("a **bold** and *it* with `code`")
    assert ("class:md.bold", "bold") in fragments
    assert ("class:md.italic", "it") in fragments
    assert ("class:md.code", "code") in fragments
    assert plain(fragments) == "a bold and it with code"


def test_snake_case_is_not_italic():
    assert inline_fragments("my_var_name") == [("", "my_var_name")]


def test_real_dictionary_flags_nonsense():
    spell = SpellCheck()
    assert spell.check_text("The quick brown fox xqzvbnm") == {"xqzvbnm"}


def test_blank_and_numeric_text_has_no_errors():
    spell = SpellCheck()
    assert spell.check_text("") == set()
    assert spell.check_text("1984 2024") == set()


def test_log_records_go_to_file(tmp_path):
    setup_logging("DEBUG", str(tmp_path))
    try:
        get_logger("writecore.test").info("hello log")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello log" in (tmp_path / LOG_FILE_NAME).read_text(encoding="utf-8")
    finally:
        setup_logging("WARNING")
