"""
Reporter Tests
--------------

Ordering and per-test attribution of report entries, plus the message
styling helpers.
"""

import threading

from qa_core.reporting import MessageLevel, Reporter, style


def test_entries_are_attributed_to_current_test(reporter: Reporter) -> None:
    reporter.start_test("login")
    reporter.log(MessageLevel.INFO, "opened page")
    reporter.end_test("passed")
    reporter.log(MessageLevel.INFO, "between tests")

    login_entries = reporter.entries(test="login")
    assert [e.message for e in login_entries] == ["opened page", "Finished with success"]
    assert reporter.entries()[-1].test is None
    assert reporter.current_test() is None


def test_end_test_failed_uses_message(reporter: Reporter) -> None:
    reporter.start_test("checkout")
    reporter.end_test("failed", "AssertionError: total is wrong")
    last = reporter.entries()[-1]
    assert last.level is MessageLevel.FAIL
    assert last.message == "AssertionError: total is wrong"
    assert last.test == "checkout"


def test_explicit_context_attribution(reporter: Reporter) -> None:
    reporter.start_test("unit-a test", context="unit-a")
    reporter.log(MessageLevel.WARN, "slow page", context="unit-a")
    reporter.log(MessageLevel.WARN, "unattributed")
    assert reporter.current_test(context="unit-a") == "unit-a test"
    assert [e.test for e in reporter.entries()] == ["unit-a test", None]


def test_parallel_writes_are_totally_ordered(reporter: Reporter) -> None:
    barrier = threading.Barrier(4)

    def worker(idx: int) -> None:
        reporter.start_test(f"test-{idx}")
        barrier.wait()
        for n in range(25):
            reporter.log(MessageLevel.INFO, f"test-{idx} line {n}")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    entries = reporter.entries()
    assert [e.sequence for e in entries] == sorted(e.sequence for e in entries)
    assert len({e.sequence for e in entries}) == len(entries) == 100
    for entry in entries:
        assert entry.message.startswith(entry.test + " ")
    for idx in range(4):
        lines = [e.message for e in reporter.entries(test=f"test-{idx}")]
        assert lines == [f"test-{idx} line {n}" for n in range(25)]


def test_report_and_log_renders_newlines(reporter: Reporter) -> None:
    entry = reporter.report_and_log("first\nsecond/nthird", MessageLevel.ERROR)
    assert entry.message == "first<br/>second<br/>third"
    assert entry.level is MessageLevel.ERROR


def test_report_bug_is_marked_warning(reporter: Reporter) -> None:
    entry = reporter.report_bug("price shows NaN")
    assert entry.level is MessageLevel.WARN
    assert entry.message == "<mark>price shows NaN</mark>"


def test_level_accepts_string(reporter: Reporter) -> None:
    assert reporter.log("PASS", "ok").level is MessageLevel.PASS


def test_missing_screenshot_file_is_kept_on_entry(reporter: Reporter, tmp_path) -> None:
    missing = str(tmp_path / "nope.png")
    entry = reporter.log(MessageLevel.FAIL, "failed", screenshot_path=missing)
    assert entry.screenshot_path == missing


def test_style_helpers() -> None:
    assert style.success_message(None) is None
    assert style.success_message("ok") == (
        '<span style="background-color:rgb(192,251,134); color:black">ok</span>'
    )
    assert style.FAILURE_COLOR in style.failure_message("bad")
    assert style.INFO_COLOR in style.info_message("note")
    assert style.highlighted_message("x", "red").startswith('<span style="background-color:red')
    assert style.marked_message("bug") == "<mark>bug</mark>"


def test_strip_html_for_log() -> None:
    report_text = "<b>Total</b><br/><mark>wrong</mark> " + style.failure_message("value")
    assert style.strip_html_for_log(report_text) == "Total\nwrong value"
    assert style.has_markup(report_text)
    assert not style.has_markup("plain text")


def test_comparison_text_is_not_markup(reporter: Reporter) -> None:
    message = "Expected count < 5 but was > 7"
    assert style.strip_html_for_log(message) == message
    assert not style.has_markup(message)
    assert style.strip_html_for_log(style.failure_message("a<b and c>d")) == "a<b and c>d"
    entry = reporter.log(MessageLevel.FAIL, message)
    assert entry.message == message
