from spellpatch.models.span import LineColumn
from spellpatch.utils.text import iter_with_line_column_from, utf8_len


def test_utf8_len_matches_encoder():
    for ch in ["a", "\n", "é", "€", "🐠", "߿", "ࠀ", "￿", "\U00010000"]:
        assert utf8_len(ch) == len(ch.encode("utf-8"))


def test_positions_and_byte_offsets_over_multibyte_text():
    got = list(iter_with_line_column_from("T🐠🐠U"))
    assert got == [
        ("T", 0, 0, LineColumn(1, 0)),
        ("🐠", 1, 1, LineColumn(1, 1)),
        ("🐠", 5, 2, LineColumn(1, 2)),
        ("U", 9, 3, LineColumn(1, 3)),
    ]


def test_newline_ends_its_line_and_next_char_starts_column_zero():
    got = [(c, lc) for c, _, _, lc in iter_with_line_column_from("ab\ncd\n\ne")]
    assert got == [
        ("a", LineColumn(1, 0)),
        ("b", LineColumn(1, 1)),
        ("\n", LineColumn(1, 2)),
        ("c", LineColumn(2, 0)),
        ("d", LineColumn(2, 1)),
        ("\n", LineColumn(2, 2)),
        ("\n", LineColumn(3, 0)),
        ("e", LineColumn(4, 0)),
    ]


def test_carriage_return_is_an_ordinary_column():
    got = [lc for _, _, _, lc in iter_with_line_column_from("a\r\nb")]
    assert got == [LineColumn(1, 0), LineColumn(1, 1), LineColumn(1, 2), LineColumn(2, 0)]


def test_custom_start_shifts_positions_but_not_offsets():
    got = list(iter_with_line_column_from("x\ny", LineColumn(5, 3)))
    assert got == [
        ("x", 0, 0, LineColumn(5, 3)),
        ("\n", 1, 1, LineColumn(5, 4)),
        ("y", 2, 2, LineColumn(6, 0)),
    ]


def test_offsets_slice_on_scalar_boundaries():
    text = "añ€🐢\nz"
    encoded = text.encode("utf-8")
    items = list(iter_with_line_column_from(text))
    for (ch, off, _, _), nxt in zip(items, items[1:] + [(None, len(encoded), None, None)]):
        assert encoded[off:nxt[1]].decode("utf-8") == ch


def test_each_call_is_a_fresh_iterator():
    it1 = iter_with_line_column_from("ab")
    next(it1)
    assert next(iter_with_line_column_from("ab"))[0] == "a"
    assert next(it1)[0] == "b"


def test_empty_text_yields_nothing():
    assert list(iter_with_line_column_from("")) == []
