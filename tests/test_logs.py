"""
Goal: URLs in log lines lose their query strings; long token-ish runs are masked.
"""
from tabbridge.services.logs import _sanitize_log_message


def test_query_strings_are_redacted():
    msg = "resolved https://mail.example.com/u/0?auth=abc123#inbox to tab 2"
    assert _sanitize_log_message(msg) == "resolved https://mail.example.com/u/0?[REDACTED] to tab 2"


def test_long_tokens_are_redacted():
    token = "A" * 40
    assert token not in _sanitize_log_message(f"header {token}")


def test_plain_messages_untouched():
    assert _sanitize_log_message("Window 3 not found") == "Window 3 not found"
