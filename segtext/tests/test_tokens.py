"""Tests for token delimiters, token bindings and substitution."""

import pytest

from segtext.logbook import LogCategory, MessageLog
from segtext.models import Position
from segtext.tokens import (DEFAULT_TOKEN_END, DEFAULT_TOKEN_ESCAPE,
                            DEFAULT_TOKEN_START, TokenProcessor)
from segtext.validation import NameValidator


@pytest.fixture
def position():
    return Position("Greeting", 1)


@pytest.fixture
def log(position):
    return MessageLog(position)


@pytest.fixture
def tokens(log, position):
    return TokenProcessor(log, position, NameValidator())


@pytest.fixture
def angle_tokens(tokens):
    assert tokens.set_token_delimiters("<<", ">>", "\\")
    return tokens


class TestDelimiters:
    def test_defaults(self, tokens):
        assert tokens.token_start == DEFAULT_TOKEN_START == "<#"
        assert tokens.token_end == DEFAULT_TOKEN_END == "#>"
        assert tokens.token_escape == DEFAULT_TOKEN_ESCAPE == "\\"

    def test_set_valid_delimiters(self, tokens, log):
        assert tokens.set_token_delimiters("{{", "}}", "!") is True
        assert (tokens.token_start, tokens.token_end, tokens.token_escape) == ("{{", "}}", "!")
        assert log.entries == []

    @pytest.mark.parametrize(
        "start,end,escape,fragment",
        [
            (None, "}}", "!", "start delimiter must not be null"),
            ("{{", None, "!", "end delimiter must not be null"),
            ("{{", "}}", None, "escape character must not be null"),
            ("", "}}", "!", "start delimiter must not be empty"),
            ("{{", "  ", "!", "end delimiter must not be empty"),
            ("{{", "}}", " ", "escape character must not be empty"),
            ("%%", "%%", "!", 'start delimiter "%%" must not be the same as the token end delimiter "%%"'),
            ("!", "}}", "!", "must not be the same as the token escape character"),
            ("{{", "!", "!", 'end delimiter "!" must not be the same'),
        ],
    )
    def test_invalid_delimiters_rejected(self, tokens, log, start, end, escape, fragment):
        assert tokens.set_token_delimiters(start, end, escape) is False
        assert (tokens.token_start, tokens.token_end, tokens.token_escape) == ("<#", "#>", "\\")
        assert fragment in log.messages(LogCategory.SETUP)[0]

    @pytest.mark.parametrize("start", ["<+", "<-", "<="])
    def test_start_ending_in_case_flag_warns(self, tokens, log, start):
        assert tokens.set_token_delimiters(start, ">>", "\\") is True
        assert "may cause confusion" in log.messages()[0]

    def test_reset_restores_constructor_values(self, tokens):
        tokens.set_token_delimiters("{{", "}}", "!")
        tokens.reset_token_delimiters()
        assert (tokens.token_start, tokens.token_end, tokens.token_escape) == ("<#", "#>", "\\")


class TestReplaceTokens:
    def test_simple_substitution(self, angle_tokens, log):
        angle_tokens.load_token_values("Greeting", {"NAME": "Bob"})
        assert angle_tokens.replace_tokens("Greeting", "Hi <<NAME>>!") == "Hi Bob!"
        assert log.entries == []

    def test_escaped_delimiters_are_literal(self, angle_tokens, log):
        text = "Use \\<<literal\\>>"
        assert angle_tokens.replace_tokens("Greeting", text) == "Use <<literal>>"
        assert log.entries == []

    def test_lone_escape_is_kept(self, tokens):
        assert tokens.replace_tokens("Greeting", "C:\\temp\\x") == "C:\\temp\\x"

    def test_text_without_tokens_unchanged(self, tokens, log):
        assert tokens.replace_tokens("Greeting", "plain text") == "plain text"
        assert tokens.replace_tokens("Greeting", "") == ""
        assert log.entries == []

    def test_multiple_tokens_on_one_line(self, tokens):
        tokens.load_token_values("Greeting", {"a": "1", "b": "2"})
        assert tokens.replace_tokens("Greeting", "<#a#>+<#b#>=<#a#><#b#>") == "1+2=12"

    def test_values_are_not_rescanned(self, tokens):
        tokens.load_token_values("Greeting", {"a": "<#b#>", "b": "oops"})
        assert tokens.replace_tokens("Greeting", "x <#a#> y") == "x <#b#> y"

    def test_name_is_trimmed(self, tokens):
        tokens.load_token_values("Greeting", {"name": "Ann"})
        assert tokens.replace_tokens("Greeting", "<# name #>") == "Ann"

    def test_unbound_token_kept_as_is(self, tokens, log):
        assert tokens.replace_tokens("Greeting", "Hi <#who#>") == "Hi <#who#>"
        assert 'token name "who" in segment Greeting' in log.messages()[0]

    def test_bindings_are_per_segment(self, tokens):
        tokens.load_token_values("Other", {"name": "Ann"})
        assert tokens.replace_tokens("Greeting", "<#name#>") == "<#name#>"
        assert tokens.replace_tokens("Other", "<#name#>") == "Ann"

    def test_missing_end_delimiter(self, tokens, log):
        tokens.load_token_values("Greeting", {"a": "1"})
        assert tokens.replace_tokens("Greeting", "<#a#> and <#a") == "1 and <#a"
        assert "no matching end delimiter" in log.messages()[0]

    def test_empty_token_name(self, tokens, log):
        assert tokens.replace_tokens("Greeting", "x<##>y") == "x<##>y"
        assert "no token name" in log.messages()[0]

    def test_blank_token_name(self, tokens, log):
        assert tokens.replace_tokens("Greeting", "<#  #>") == "<#  #>"
        assert "no token name" in log.messages()[0]

    def test_invalid_token_name(self, tokens, log):
        assert tokens.replace_tokens("Greeting", "<#1st#>") == "<#1st#>"
        assert 'invalid name: "1st"' in log.messages()[0]

    def test_null_value_becomes_empty(self, tokens, log):
        tokens.load_token_values("Greeting", {"name": None})
        assert tokens.replace_tokens("Greeting", "[<#name#>]") == "[]"
        assert 'Token "name" has no assigned value' in log.messages()[0]

    def test_empty_value_becomes_empty(self, tokens, log):
        tokens.load_token_values("Greeting", {"name": ""})
        assert tokens.replace_tokens("Greeting", "[<#name#>]") == "[]"
        assert 'Token "name" has an empty value' in log.messages()[0]

    def test_log_entries_are_located(self, tokens, log, position):
        position.line_number = 3
        tokens.replace_tokens("Greeting", "<#who#>")
        assert (log.entries[0].segment, log.entries[0].line_number) == ("Greeting", 3)


class TestCaseFlags:
    @pytest.fixture(autouse=True)
    def bind(self, tokens):
        tokens.load_token_values("Greeting", {"name": "customer", "Type": "Order"})

    def test_upper_case_flag(self, tokens):
        assert tokens.replace_tokens("Greeting", "<#+name#>") == "Customer"

    def test_lower_case_flag(self, tokens):
        assert tokens.replace_tokens("Greeting", "<#-Type#>") == "order"

    def test_same_case_flag(self, tokens):
        assert tokens.replace_tokens("Greeting", "<#=Type#>") == "Order"

    def test_flag_only_changes_first_character(self, tokens):
        tokens.load_token_values("Greeting", {"name": "mcDonald"})
        assert tokens.replace_tokens("Greeting", "<#+name#>") == "McDonald"

    def test_flag_with_no_name(self, tokens, log):
        assert tokens.replace_tokens("Greeting", "<#+#>") == "<#+#>"
        assert "no token name" in log.messages()[0]


class TestTokenBindings:
    def test_values_merge(self, tokens):
        tokens.load_token_values("Greeting", {"a": "1"})
        tokens.load_token_values("Greeting", {"b": "2"})
        tokens.load_token_values("Greeting", {"a": "3"})
        assert tokens.token_values("Greeting") == {"a": "3", "b": "2"}

    def test_values_are_stringified(self, tokens):
        tokens.load_token_values("Greeting", {"count": 3})
        assert tokens.token_values("Greeting") == {"count": "3"}

    def test_null_dictionary(self, tokens, log):
        tokens.load_token_values("Greeting", None)
        assert 'null token dictionary was supplied for segment "Greeting"' in log.messages()[0]

    def test_empty_dictionary(self, tokens, log):
        tokens.load_token_values("Greeting", {})
        assert 'empty token dictionary was supplied for segment "Greeting"' in log.messages()[0]
        assert tokens.token_values("Greeting") == {}

    def test_invalid_names_skipped(self, tokens, log):
        tokens.load_token_values("Greeting", {"1bad": "x", "good": "y"})
        assert tokens.token_values("Greeting") == {"good": "y"}
        assert 'invalid token name "1bad"' in log.messages()[0]

    def test_unknown_names_skipped_once_tokens_are_known(self, tokens, log):
        tokens.extract_tokens("Greeting", "Hello <#name#>")
        tokens.load_token_values("Greeting", {"name": "Ann", "other": "x"})
        assert tokens.token_values("Greeting") == {"name": "Ann"}
        assert 'unknown token name "other"' in log.messages()[0]

    def test_extract_tokens(self, tokens):
        tokens.extract_tokens("Greeting", "<#a#> \\<#b#> <#+c#> <#1d#>")
        tokens.extract_tokens("Greeting", "<#e#>")
        assert tokens.known_tokens("Greeting") == {"a", "c", "e"}
        assert tokens.known_tokens("Missing") == set()

    def test_rescan_uses_current_delimiters(self, tokens, log):
        tokens.extract_tokens("Greeting", "Hi <<NAME>>!")
        assert tokens.known_tokens("Greeting") == set()
        tokens.set_token_delimiters("<<", ">>", "\\")
        tokens.rescan_tokens({"Greeting": ["Hi <<NAME>>!"], "Empty": []})
        assert tokens.known_tokens("Greeting") == {"NAME"}
        tokens.load_token_values("Greeting", {"NAME": "Bob"})
        assert tokens.token_values("Greeting") == {"NAME": "Bob"}
        assert log.entries == []

    def test_rescan_drops_segments_not_given(self, tokens):
        tokens.extract_tokens("Old", "<#a#>")
        tokens.rescan_tokens({"New": ["<#b#>"]})
        assert tokens.known_tokens("Old") == set()
        assert tokens.known_tokens("New") == {"b"}

    def test_clear_tokens(self, tokens):
        tokens.extract_tokens("Greeting", "<#a#>")
        tokens.load_token_values("Greeting", {"a": "1"})
        tokens.clear_tokens()
        assert tokens.known_tokens("Greeting") == set()
        assert tokens.token_values("Greeting") == {}
