"""
Tests for size-based output routing.
"""

from rustbot.auto_reply.output import (
    ATTACHMENT_MESSAGE,
    TOO_LONG_MESSAGE,
    OutputMode,
    code_block,
    route_output,
)
from rustbot.config.schema import OutputConfig


def test_code_block_adds_missing_newline():
    assert code_block("3") == "```\n3\n```"
    assert code_block("3\n") == "```\n3\n```"


def test_code_block_empty_output():
    assert code_block("") == "```\n```"


def test_short_output_is_inline():
    reply = route_output("hello\n")

    assert reply.mode == OutputMode.INLINE
    assert reply.content == "```\nhello\n```"
    assert reply.attachment is None


def test_inline_limit_counts_the_wrapped_message():
    fence = len("```\n```")
    config = OutputConfig(inline_limit=2000)

    fits = "a" * (2000 - fence - 1) + "\n"
    too_big = "a" * (2000 - fence) + "\n"

    assert route_output(fits, config).mode == OutputMode.INLINE
    assert route_output(too_big, config).mode == OutputMode.ATTACHMENT


def test_inline_limit_counts_bytes_not_characters():
    config = OutputConfig(inline_limit=20)
    # 6 characters, 18 bytes
    output = "日本語日本語"

    assert route_output(output, config).mode == OutputMode.ATTACHMENT


def test_long_output_is_attached():
    output = "line\n" * 1000
    reply = route_output(output)

    assert reply.mode == OutputMode.ATTACHMENT
    assert reply.content == ATTACHMENT_MESSAGE
    assert reply.attachment == output.encode("utf-8")
    assert reply.filename == "output.txt"


def test_attachment_filename_is_configurable():
    config = OutputConfig(inline_limit=10, attachment_filename="stdout.txt")

    assert route_output("x" * 100, config).filename == "stdout.txt"


def test_output_over_attachment_limit_is_refused():
    config = OutputConfig(inline_limit=10, attachment_limit=100)
    reply = route_output("x" * 101, config)

    assert reply.mode == OutputMode.TOO_LONG
    assert reply.content == TOO_LONG_MESSAGE
    assert reply.attachment is None


def test_attachment_limit_is_inclusive():
    config = OutputConfig(inline_limit=10, attachment_limit=100)

    assert route_output("x" * 100, config).mode == OutputMode.ATTACHMENT


def test_legacy_limits_refuse_without_attachment():
    config = OutputConfig(inline_limit=500, attachment_limit=0)

    assert route_output("x" * 400, config).mode == OutputMode.INLINE
    assert route_output("x" * 600, config).content == TOO_LONG_MESSAGE
