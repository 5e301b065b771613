import contextlib
import io

import pytest

import driver
from huffman import HuffmanTree, InvalidBitError, InvalidFrequencyError


def _run(script):
    out = io.StringIO()
    tree = driver.run_script(io.StringIO(script), out=out)
    return tree, out.getvalue().splitlines()


def test_parse_bits():
    assert driver.parse_bits("0110") == [False, True, True, False]
    assert driver.parse_bits("") == []


@pytest.mark.parametrize("text", ["012", "0 1", "abc"])
def test_parse_bits_rejects_other_characters(text):
    with pytest.raises(InvalidBitError):
        driver.parse_bits(text)


def test_full_session():
    script = """\
# classic example
insert_freq a 5
insert_freq b 9
insert_freq c 12
insert_freq d 13
insert_freq e 16
insert_freq f 45

print_heap
build_tree
print_heap
decode 0
decode 1100111101
decode 011
"""
    tree, lines = _run(script)
    assert lines == [
        "(a:5) (b:9) (c:12) (d:13) (e:16) (f:45)",
        "(internal:100)",
        "f",
        "aed",
        "f",
    ]
    assert tree.root.frequency == 100


def test_print_heap_when_empty():
    _, lines = _run("print_heap\n")
    assert lines == ["Heap is empty."]


@pytest.mark.parametrize("line, expected", [
    ("insert_freq ab 3", driver.BAD_CHARACTER),
    ("insert_freq a x", driver.INVALID_ARGUMENT),
    ("insert_freq a -4", driver.INVALID_ARGUMENT),
    ("insert_freq a", driver.UNKNOWN_COMMAND),
    ("print_heap now", driver.UNKNOWN_COMMAND),
    ("frobnicate", driver.UNKNOWN_COMMAND),
])
def test_bad_commands_report_errors(line, expected):
    tree, lines = _run(line + "\n")
    assert lines == [expected]
    assert len(tree.queue) == 0


def test_decode_errors_do_not_stop_script():
    script = """\
decode 01
insert_freq a 1
insert_freq b 2
build_tree
decode 0120
decode 10
"""
    _, lines = _run(script)
    assert lines == [driver.INVALID_ARGUMENT, driver.INVALID_ARGUMENT, "ba"]


def test_decode_empty_tree_and_single_symbol_tree():
    _, lines = _run("build_tree\ndecode 0\n")
    assert lines == [driver.INVALID_ARGUMENT]

    _, lines = _run("insert_freq a 5\nbuild_tree\ndecode 0\n")
    assert lines == [driver.INVALID_ARGUMENT]


def test_run_script_reuses_given_tree():
    tree = HuffmanTree()
    out = io.StringIO()
    driver.run_script(["insert_freq x 1\n"], out=out, tree=tree)
    driver.run_script(["insert_freq y 2\n", "build_tree\n", "decode 01\n"], out=out, tree=tree)
    assert out.getvalue() == "xy\n"


def test_main_reads_script_file(tmp_path, monkeypatch, capsys):
    script = tmp_path / "commands.txt"
    script.write_text("insert_freq p 3\ninsert_freq q 1\nbuild_tree\ndecode 0011\n", encoding="utf-8")
    monkeypatch.setattr("sys.argv", ["driver.py", str(script)])
    assert driver.main() == 0
    assert capsys.readouterr().out == "qqpp\n"


@pytest.mark.parametrize("token", ["1_0", "١٢", "12abc", "", "--5", "3.0"])
def test_parse_frequency_rejects_non_ascii_integer_forms(token):
    with pytest.raises(InvalidFrequencyError):
        driver.parse_frequency(token)


def test_parse_frequency_accepts_signed_digits():
    assert driver.parse_frequency("42") == 42
    assert driver.parse_frequency("+7") == 7
    assert driver.parse_frequency("-3") == -3


def test_underscored_frequency_is_an_invalid_argument():
    tree, lines = _run("insert_freq a 1_0\nprint_heap\n")
    assert lines == [driver.INVALID_ARGUMENT, "Heap is empty."]


def test_default_output_follows_redirected_stdout():
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        driver.run_script(["insert_freq a 1\n", "print_heap\n"])
    assert buf.getvalue() == "(a:1)\n"
