import pytest

from spellpatch.action import Finish, UserPicked, run, write_user_pick_changes_to_disk
from spellpatch.config import Config
from spellpatch.models.edit import Edit
from spellpatch.models.origin import ContentOrigin
from spellpatch.models.span import LineColumn, Span
from spellpatch.models.suggestion import Suggestion, SuggestionSet


def read(path):
    with open(path, "rb") as f:
        return f.read().decode("utf-8")


def suggestion(origin, line, start, stop, *replacements):
    return Suggestion(
        detector="hunspell",
        origin=origin,
        span=Span.from_line_range(line, start, stop),
        replacements=list(replacements),
        description="misspelled",
    )


@pytest.fixture
def two_files(write_file):
    a = write_file("a.md", "teh cat\nsat on teh mat\n")
    b = write_file("b.rs", "/// recieve\nfn f() {}\n")
    oa = ContentOrigin.markdown_file(a)
    ob = ContentOrigin.source_file(b)
    suggestions = SuggestionSet(
        [
            suggestion(oa, 1, 0, 3, "the", "ten"),
            suggestion(oa, 2, 7, 10, "the"),
            suggestion(ob, 1, 4, 11, "receive"),
            suggestion(ob, 2, 0, 2),  # no candidate
        ]
    )
    return a, b, oa, ob, suggestions


def test_finish_found_any():
    assert Finish.mistakes(3).found_any()
    assert not Finish.mistakes(0).found_any()
    assert not Finish.abort().found_any()
    assert Finish.abort().aborted


def test_unknown_action_raises():
    with pytest.raises(ValueError):
        run("lint", SuggestionSet())


def test_check_reports_and_counts_without_writing(two_files):
    a, b, _oa, _ob, suggestions = two_files
    lines = []
    finish = run("check", suggestions, log_callback=lines.append)
    assert finish == Finish.mistakes(4)
    assert len(lines) == 4
    assert lines[0].endswith("[hunspell] misspelled -> the|ten")
    assert read(a) == "teh cat\nsat on teh mat\n"
    assert read(b) == "/// recieve\nfn f() {}\n"


def test_reflow_accepts_first_replacement_everywhere(two_files):
    a, b, _oa, _ob, suggestions = two_files
    finish = run("reflow", suggestions)
    assert finish == Finish.mistakes(3)
    assert read(a) == "the cat\nsat on the mat\n"
    assert read(b) == "/// receive\nfn f() {}\n"


def test_reflow_sorts_edits_per_file(write_file):
    path = write_file("c.md", "aa bb\n")
    origin = ContentOrigin.markdown_file(path)
    suggestions = SuggestionSet([suggestion(origin, 1, 3, 5, "BB"), suggestion(origin, 1, 0, 2, "AA")])
    run("reflow", suggestions)
    assert read(path) == "AA BB\n"


def test_fix_abort_touches_nothing(two_files):
    a, b, _oa, _ob, suggestions = two_files
    seen = []

    def picker(s):
        seen.append(s)
        return UserPicked(aborted=True)

    finish = run("fix", suggestions, picker_callback=picker)
    assert finish == Finish.abort()
    assert seen == [suggestions]
    assert read(a) == "teh cat\nsat on teh mat\n"
    assert read(b) == "/// recieve\nfn f() {}\n"


def test_fix_writes_only_picked_edits(two_files):
    a, b, oa, _ob, suggestions = two_files

    def picker(s):
        picked = UserPicked()
        picked.add(oa, Edit.from_replacement("ten", s.get(oa)[0].span))
        return picked

    finish = run("fix", suggestions, picker_callback=picker)
    assert finish == Finish.mistakes(1)
    assert read(a) == "ten cat\nsat on teh mat\n"
    assert read(b) == "/// recieve\nfn f() {}\n"


def test_fix_without_picker_raises(two_files):
    *_rest, suggestions = two_files
    with pytest.raises(ValueError):
        run("fix", suggestions)


def test_fix_with_nothing_picked(two_files):
    a, *_rest, suggestions = two_files
    finish = run("fix", suggestions, picker_callback=lambda s: UserPicked())
    assert finish == Finish.mistakes(0)
    assert not finish.found_any()
    assert read(a) == "teh cat\nsat on teh mat\n"


def test_fix_insertion_pick(write_file):
    path = write_file("i.md", "A🐢C")
    origin = ContentOrigin.markdown_file(path)
    at = LineColumn(1, 2)

    def picker(_s):
        picked = UserPicked()
        picked.add(origin, Edit(Span(at, at), "Q"))
        return picked

    run("fix", SuggestionSet(), picker_callback=picker)
    assert read(path) == "A🐢QC"


def test_write_user_pick_consumes_the_pick(write_file):
    path = write_file("p.md", "teh\n")
    origin = ContentOrigin.markdown_file(path)
    picked = UserPicked()
    picked.add(origin, Edit(Span.from_line_range(1, 0, 3), "the"))
    summary = write_user_pick_changes_to_disk(picked)
    assert summary.edit_count == 1
    assert picked.total_count() == 0
    # A second write is a no-op rather than a shifted re-application.
    write_user_pick_changes_to_disk(picked)
    assert read(path) == "the\n"


def test_config_reaches_materialization(write_file, tmp_path):
    path = write_file("k.md", "teh\n")
    origin = ContentOrigin.markdown_file(path)
    suggestions = SuggestionSet([suggestion(origin, 1, 0, 3, "the")])
    run("reflow", suggestions, config=Config(backup_ext=".orig"))
    assert read(path) == "the\n"
    assert read(tmp_path / "k.md.orig") == "teh\n"


def test_reflow_reports_skipped_gitignored_files(write_file, tmp_path):
    (tmp_path / ".gitignore").write_text("out/\n")
    path = write_file("out/gen.md", "teh\n")
    origin = ContentOrigin.markdown_file(path)
    lines = []
    finish = run(
        "reflow",
        SuggestionSet([suggestion(origin, 1, 0, 3, "the")]),
        log_callback=lines.append,
        config=Config(respect_gitignore=True),
    )
    assert finish == Finish.mistakes(0)
    assert any("Skipped git-ignored" in l for l in lines)
    assert read(path) == "teh\n"


def test_fix_counts_only_edits_written(write_file, tmp_path):
    (tmp_path / ".gitignore").write_text("out/\n")
    kept = write_file("doc.md", "teh\n")
    ignored = write_file("out/gen.md", "teh\n")
    ok = ContentOrigin.markdown_file(kept)
    skip = ContentOrigin.markdown_file(ignored)
    suggestions = SuggestionSet([suggestion(ok, 1, 0, 3, "the"), suggestion(skip, 1, 0, 3, "the")])

    def pick_everything(found):
        picked = UserPicked()
        for origin, items in found:
            for s in items:
                picked.add(origin, s.first_edit())
        return picked

    finish = run(
        "fix",
        suggestions,
        picker_callback=pick_everything,
        config=Config(respect_gitignore=True),
    )
    assert finish == Finish.mistakes(1)
    assert read(kept) == "the\n"
    assert read(ignored) == "teh\n"
