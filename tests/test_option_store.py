import io
import sys

import pytest
from rich.console import Console

from usageopt import OptionStore, ScanOrdering, UnknownOptionError
from usageopt.exceptions import ConversionError
from usageopt.option import ArgumentPolicy, OptionDescriptor
from usageopt.scanner import OptionScanner, ScanEvent, ScanEventKind, ScanResult

USAGE = """
usage: calc [OPTION...] NUMBER...

-w --warning          print warnings
-p --precision=NUM    number of digits
-e --epsilon[=NUM]    comparison tolerance
-f FILE
    read input from FILE
"""


@pytest.fixture(autouse=True)
def no_posixly_correct(monkeypatch):
    monkeypatch.delenv("POSIXLY_CORRECT", raising=False)


@pytest.fixture
def store():
    return OptionStore(USAGE)


def test_str(store):
    assert store.good()
    assert str(store) == "OptionStore(options=4, flags=7, errors=0)"
    assert repr(store) == str(store)


def test_parse_example(store):
    store.parse(["-w", "--precision=3", "5", "3"])
    assert store.good()
    assert store["warning"]
    assert store["precision"].as_str() == "3"
    assert store["p"].as_int() == 3
    assert store.arguments.as_list() == ["5", "3"]
    assert store.arguments.as_list(int) == [5, 3]
    assert not store["f"]
    assert store["f"].value_or("input.txt") == "input.txt"


def test_parse_returns_store(store):
    assert store.parse(["-w"]) is store


@pytest.mark.parametrize("flag", ["w", "warning", "-w", "--warning"])
def test_lookup_by_any_spelling(store, flag):
    store.parse(["-w"])
    assert store[flag].count == 1
    assert flag in store


def test_unknown_lookup_raises(store):
    with pytest.raises(UnknownOptionError, match="unknown option: bogus"):
        store["bogus"]
    with pytest.raises(KeyError):
        store["--bogus"]
    assert "bogus" not in store
    assert 3 not in store


def test_declared_but_absent_option_is_unset(store):
    store.parse([])
    value = store["precision"]
    assert not value
    with pytest.raises(ConversionError):
        value.as_int()
    assert store.get("precision", 2) == 2


def test_unknown_option_is_accumulated(store):
    store.parse(["--bogus", "-w"])
    assert not store.good()
    assert store.errors == ["Unknown option: --bogus"]
    assert store["w"]
    assert list(store.values()) == ["warning"]


def test_unknown_short_option(store):
    store.parse(["-x"])
    assert store.errors == ["Unknown option: x"]


def test_missing_argument(store):
    store.parse(["-w", "-f"])
    assert store.errors == ["Missing argument for: f"]
    assert store["w"]
    assert not store["f"]


def test_repeated_option_accumulates_in_order(store):
    store.parse(["-f", "a", "-fb", "-f", "c"])
    value = store["f"]
    assert value.count == 3
    assert value.as_list() == ["a", "b", "c"]


def test_repeated_switch(store):
    store.parse(["-w", "--warning", "-ww"])
    assert store["warning"].count == 4
    assert store["warning"].lines() == ["", "", "", ""]


def test_repeated_numeric_option(store):
    store.parse(["-p", "1", "--precision=2"])
    assert not store["p"].convert(int).ok
    assert store["p"].as_list(int) == [1, 2]


def test_switch_stores_empty_text(store):
    store.parse(["-w"])
    assert store["w"].text == ""
    assert bool(store["w"]) is True


def test_optional_argument(store):
    store.parse(["--epsilon"])
    assert store["e"]
    assert store["e"].value_or(0.1) == 0.1

    store.parse(["--epsilon=0.5"])
    assert store["epsilon"].as_float() == 0.5

    store.parse(["-e0.25"])
    assert store["epsilon"].as_float() == 0.25


def test_short_only_option_with_argument(store):
    store.parse(["-f", "data.txt", "rest"])
    assert store["f"].as_str() == "data.txt"
    assert store.arguments.lines() == ["rest"]


def test_abbreviated_long_option(store):
    store.parse(["--prec=4"])
    assert store["precision"].as_int() == 4


def test_second_parse_replaces_first(store):
    store.parse(["-w", "--bogus", "x", "y"])
    assert not store.good()

    store.parse(["-p", "2"])
    assert store.good()
    assert not store["w"]
    assert store["p"].as_int() == 2
    assert not store.arguments
    assert store.arguments.lines() == []


def test_parse_defaults_to_sys_argv(store, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["calc", "-w", "1"])
    store.parse()
    assert store["w"]
    assert store.arguments.lines() == ["1"]


def test_permute_ordering(monkeypatch):
    store = OptionStore(USAGE, ordering="permute")
    assert store.ordering is ScanOrdering.PERMUTE
    store.parse(["5", "-w", "3"])
    assert store["w"]
    assert store.arguments.as_list(int) == [5, 3]


def test_require_order_is_default(store):
    store.parse(["5", "-w", "3"])
    assert not store["w"]
    assert store.arguments.lines() == ["5", "-w", "3"]


def test_get(store):
    store.parse(["--precision", "3"])
    assert store.get("precision", 2) == 3
    assert store.get("p") == "3"
    assert store.get("f") is None
    assert store.get("f", "out.txt") == "out.txt"


def test_values(store):
    store.parse(["-w", "-f", "x"])
    values = store.values()
    assert sorted(values) == ["f", "warning"]
    assert values["f"].as_str() == "x"


def test_bad_usage_text_degrades():
    store = OptionStore("-xy bad\n-a --all\n-a --again")
    assert not store.good()
    assert store.errors == [
        "invalid option at line: 0\n-xy bad",
        "duplicate short option: a",
    ]
    store.parse(["-a", "--again"])
    assert store["all"]
    assert store["a"]
    assert store["again"]
    assert not store.good()


def test_halt_on_error():
    store = OptionStore("-xy\n-a --all\n-bc", halt_on_error=True)
    assert store.errors == ["invalid option at line: 0\n-xy"]
    assert "all" not in store


def test_prose_only_usage_is_good():
    store = OptionStore("usage: prog FILE\n\nDoes things.")
    assert store.good()
    assert len(store.table) == 0
    store.parse(["a", "b"])
    assert store.arguments.lines() == ["a", "b"]


def test_load_replaces_options(store):
    store.parse(["-w"])
    store.load("-q --quiet")
    assert "warning" not in store
    assert "quiet" in store
    assert not store["quiet"]


def test_usage_prints_text_verbatim(store):
    buffer = io.StringIO()
    store.usage(file=buffer)
    assert buffer.getvalue() == USAGE + "\n"


def test_usage_keeps_tabs_and_trailing_spaces():
    text = "usage:\tprog\n-w --warning\tprint warnings   \n"
    buffer = io.StringIO()
    OptionStore(text).usage(file=buffer)
    assert buffer.getvalue() == text + "\n"


def test_usage_on_default_console(store, capsys):
    store.usage()
    captured = capsys.readouterr()
    assert "-e --epsilon[=NUM]    comparison tolerance" in captured.out


def test_report_error(store):
    buffer = io.StringIO()
    store.report_error(file=buffer)
    assert buffer.getvalue() == ""

    store.parse(["--bogus", "-f"])
    store.report_error(file=buffer)
    assert buffer.getvalue() == "Unknown option: --bogus\nMissing argument for: f\n"


def test_report_error_defaults_to_stderr(store, capsys):
    store.parse(["--bogus"])
    store.report_error()
    captured = capsys.readouterr()
    assert "Unknown option: --bogus" in captured.err
    assert captured.out == ""


def test_report_error_quotes_line_verbatim():
    store = OptionStore("-xy\tbad")
    buffer = io.StringIO()
    store.report_error(file=buffer)
    assert buffer.getvalue() == "invalid option at line: 0\n-xy\tbad\n"


def test_debug_report(store):
    buffer = io.StringIO()
    store.parse(["-w", "--precision=3", "--bogus", "5"])
    store.debug_report(console=Console(file=buffer, width=120))
    output = buffer.getvalue()
    assert "short option string: :wp:e::f:" in output
    assert "precision" in output
    assert "'3'" in output
    assert "long options:" in output
    assert "--epsilon" in output
    assert "arguments:" in output
    assert "Unknown option: --bogus" in output


def test_option_missing_from_index_stops_scan(store, monkeypatch):
    stray = OptionDescriptor("z", None, ArgumentPolicy.NONE, 99)
    warning = store.table.find_short("w")

    def scan(self, args):
        return ScanResult(
            events=[
                ScanEvent(ScanEventKind.OPTION, "z", descriptor=stray),
                ScanEvent(ScanEventKind.OPTION, "w", descriptor=warning),
            ],
            positional=["x"],
        )

    monkeypatch.setattr(OptionScanner, "scan", scan)
    store.parse(["-z", "-w", "x"])
    assert store.errors == ["unknown short option: z"]
    assert not store["w"]
    assert store.arguments.lines() == ["x"]


def test_get_switch_with_bool_default(store):
    store.parse(["-w"])
    assert store.get("warning", False) is True
    assert store["w"].value_or(False) is True
    assert store.get("e", False) is False
