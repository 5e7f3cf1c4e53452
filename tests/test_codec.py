"""Tests for the ``.nasin`` line codec."""

from __future__ import annotations

import logging

import pytest

from mineplack_todo.models.task import Task
from mineplack_todo.storage.codec import decode, decode_line, encode, encode_line


class TestEncode:
    def test_line_format(self) -> None:
        assert encode_line(1, Task(name="Buy milk")) == 'T1 : "Buy milk" : STRING : DONE:false'
        assert encode_line(7, Task(name="x", done=True)) == 'T7 : "x" : STRING : DONE:true'

    def test_every_line_terminated(self) -> None:
        text = encode([Task(name="a"), Task(name="b", done=True)])
        assert text == (
            'T1 : "a" : STRING : DONE:false\n'
            'T2 : "b" : STRING : DONE:true\n'
        )

    def test_empty_sequence(self) -> None:
        assert encode([]) == ""

    def test_empty_name(self) -> None:
        assert encode([Task()]) == 'T1 : "" : STRING : DONE:false\n'


class TestDecode:
    def test_round_trip(self) -> None:
        tasks = [
            Task(name="Buy milk"),
            Task(name="Call the bank", done=True),
            Task(name=""),
            Task(name="with: colon and 'quotes'"),
        ]
        assert decode(encode(tasks)) == tasks

    def test_index_field_is_ignored(self) -> None:
        text = 'T9 : "first" : STRING : DONE:false\nT1 : "second" : STRING : DONE:true\n'
        assert decode(text) == [Task(name="first"), Task(name="second", done=True)]

    def test_type_tag_is_ignored(self) -> None:
        assert decode('T1 : "a" : INT : DONE:true') == [Task(name="a", done=True)]

    def test_malformed_lines_skipped(self) -> None:
        text = (
            'T1 : "good" : STRING : DONE:true\n'
            "garbage\n"
            'T2 : "short" : STRING\n'
            'T3 : "also good" : STRING : DONE:false\n'
        )
        assert decode(text) == [Task(name="good", done=True), Task(name="also good")]

    def test_skipped_lines_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="mineplack_todo.storage.codec"):
            decode("bad\nworse\n")
        assert "Skipped 2 malformed line(s)" in caplog.text

    @pytest.mark.parametrize(
        "flag", ["DONE:TRUE", "DONE:1", "DONE:", "done:true", "DONE:true ", "true"]
    )
    def test_only_exact_done_true_counts(self, flag: str) -> None:
        assert decode_line(f'T1 : "a" : STRING : {flag}') == Task(name="a", done=False)

    def test_surrounding_quotes_stripped_unconditionally(self) -> None:
        assert decode_line('T1 : ""quoted"" : STRING : DONE:false').name == "quoted"
        assert decode_line("T1 : bare : STRING : DONE:false").name == "bare"

    def test_name_containing_delimiter_is_truncated(self) -> None:
        line = encode_line(1, Task(name="a : b", done=True))
        task = decode_line(line)
        assert task is not None
        assert task.name == "a"

    def test_crlf_line_endings(self) -> None:
        text = 'T1 : "a" : STRING : DONE:true\r\nT2 : "b" : STRING : DONE:false\r\n'
        assert decode(text) == [Task(name="a", done=True), Task(name="b")]

    def test_empty_input(self) -> None:
        assert decode("") == []
