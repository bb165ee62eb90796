# tests/test_parser.py
from __future__ import annotations

import json

from runner.parser import parse_directives


def test_no_fences_no_directives():
    assert parse_directives("Just some prose.") == []
    assert parse_directives("") == []


def test_plain_code_fence_is_not_a_directive():
    text = "Example:\n```python\nprint('hi')\n```"
    assert parse_directives(text) == []


def test_both_header_forms_yield_identical_pairs():
    colon = 'x\n```tool:readFile\n{"path": "a.txt"}\n```\n'
    space = 'x\n```tool readFile\n{"path": "a.txt"}\n```\n'

    (a,) = parse_directives(colon)
    (b,) = parse_directives(space)

    assert (a.tool, a.payload) == (b.tool, b.payload) == ("readFile", '{"path": "a.txt"}')
    assert a.syntax == "colon"
    assert b.syntax == "space"


def test_mixed_forms_keep_source_order():
    text = (
        "First:\n```tool listDir\n{\"path\": \".\"}\n```\n"
        "Then:\n```tool:readFile\n{\"path\": \"a.txt\"}\n```\n"
        "Finally:\n```tool deleteFile\n{\"path\": \"a.txt\"}\n```\n"
    )
    assert [d.tool for d in parse_directives(text)] == ["listDir", "readFile", "deleteFile"]


def test_payload_is_stripped_and_multiline():
    text = '```tool:createFile\n\n  {\n  "path": "a.txt"\n}  \n```'
    (d,) = parse_directives(text)
    assert d.payload == '{\n  "path": "a.txt"\n}'


def test_empty_payload():
    (d,) = parse_directives("```tool:listDir\n```")
    assert d.tool == "listDir"
    assert d.payload == ""


def test_crlf_header_line():
    (d,) = parse_directives('```tool:readFile\r\n{"path": "a"}\r\n```')
    assert d.payload == '{"path": "a"}'


def test_backticks_inside_payload_do_not_close_the_block():
    payload = r'{"path": "README.md", "content": "Run:\n```sh\nmake\n```\n"}'
    text = f"Writing docs.\n```tool:createFile\n{payload}\n```\nDone."

    (d,) = parse_directives(text)

    assert d.payload == payload
    assert json.loads(d.payload)["content"] == "Run:\n```sh\nmake\n```\n"


def test_closing_fence_may_be_indented():
    (d,) = parse_directives('  ```tool listDir\n  {"path": "."}\n  ```')
    assert d.payload == '{"path": "."}'
