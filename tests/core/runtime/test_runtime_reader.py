# tests/core/runtime/test_runtime_reader.py
"""
Testes do leitor do arquivo de runtime.

Cobrem comentários, seções, aspas, erros com número de linha e a
distinção entre arquivo ausente e arquivo malformado.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from canpi_config.core.runtime.errors import ParseError
from canpi_config.core.runtime.reader import (
    RawEntry,
    is_valid_key,
    iter_raw_entries,
    parse_runtime_text,
    read_runtime_file,
)


def test_parse_canpi_cfg(canpi_runtime_text: str) -> None:
    raw = parse_runtime_text(canpi_runtime_text)

    assert raw == {
        "canid": "101",
        "node_number": "5432",
        "start_event_id": "2",
        "node_mode": "1",
        "obsolete_key": "1",
        "router_ssid": "home",
        "ap_ssid": "canpi",
    }
    assert list(raw) == ["canid", "node_number", "start_event_id", "node_mode", "obsolete_key", "router_ssid", "ap_ssid"]


def test_entries_carry_line_and_section(canpi_runtime_text: str) -> None:
    entries = {e.name: e for e in iter_raw_entries(canpi_runtime_text)}

    assert entries["canid"] == RawEntry(name="canid", value="101", line=2, section=None)
    assert entries["router_ssid"].section == "network"
    assert entries["router_ssid"].line == 8
    assert entries["ap_ssid"].section == "apmode"


def test_comments_and_blank_lines_are_ignored() -> None:
    text = "\n# comment\n   \n; ini comment\n  # indented comment\nport=9090\n"
    assert parse_runtime_text(text) == {"port": "9090"}


def test_value_keeps_everything_after_first_equals() -> None:
    assert parse_runtime_text("url=http://x/?a=b") == {"url": "http://x/?a=b"}


@pytest.mark.parametrize(
    "line, expected",
    [
        ('ssid="home"', "home"),
        ("ssid='home'", "home"),
        ('ssid=" spaced "', " spaced "),
        ('ssid="', '"'),
        ("ssid=", ""),
        ('ssid="mis\'', "\"mis'"),
    ],
)
def test_quoting(line: str, expected: str) -> None:
    assert parse_runtime_text(line)["ssid"] == expected


@pytest.mark.parametrize(
    "text, line",
    [
        ("port=1\njust some words\n", 2),
        ("=value\n", 1),
        ("bad key=1\n", 1),
        ("[network\nport=1\n", 1),
        ("port=1\n# c\nport=2\n", 3),
        ("[a]\nport=1\n[b]\nport=2\n", 4),
    ],
)
def test_malformed_lines_raise_with_line_number(text: str, line: int) -> None:
    with pytest.raises(ParseError) as exc:
        parse_runtime_text(text)
    assert exc.value.line == line
    assert f"line {line}" in str(exc.value)


def test_absent_file_is_distinguished(tmp_path: Path) -> None:
    assert read_runtime_file(tmp_path / "canpi.cfg") is None


def test_empty_file_is_empty_mapping(tmp_path: Path) -> None:
    p = tmp_path / "canpi.cfg"
    p.write_text("", encoding="utf-8")
    assert read_runtime_file(p) == {}


def test_read_file(tmp_path: Path, canpi_runtime_text: str) -> None:
    p = tmp_path / "canpi.cfg"
    p.write_text(canpi_runtime_text, encoding="utf-8")
    assert read_runtime_file(p)["router_ssid"] == "home"


def test_malformed_file_raises(tmp_path: Path) -> None:
    p = tmp_path / "canpi.cfg"
    p.write_text("canid\n", encoding="utf-8")
    with pytest.raises(ParseError):
        read_runtime_file(p)


@pytest.mark.parametrize("value", ["caf\u2028e", "a\x0bb", "a\x0cb", "x\x85y", "p\u2029q", "f\x1cs"])
def test_only_lf_crlf_and_cr_end_a_line(value: str) -> None:
    text = f"ssid={value}\r\ncanid=101\rnode_number=5432\n"
    assert parse_runtime_text(text) == {"ssid": value, "canid": "101", "node_number": "5432"}


def test_is_valid_key() -> None:
    assert is_valid_key("router_ssid")
    assert is_valid_key("net.router-ssid")
    assert not is_valid_key("")
    assert not is_valid_key("log level")
    assert not is_valid_key(" port")
    assert not is_valid_key("a=b")
