from vibe_codegen.parsing import MarkerScanner, extract_files
from vibe_codegen.parsing.scanner import (
    CompleteSeen,
    CompletionParsed,
    FileClosed,
    FileOpened,
    PlanParsed,
    ScanState,
)


def feed_in_chunks(text: str, size: int):
    scanner = MarkerScanner()
    events = []
    for i in range(0, len(text), size):
        events += scanner.feed(text[i:i + size])
    return scanner, events


class TestMarkerScanner:
    def test_event_order(self, stream_text):
        _, events = feed_in_chunks(stream_text, len(stream_text))
        assert [type(e) for e in events] == [
            PlanParsed, FileOpened, FileClosed, FileOpened, FileClosed, CompleteSeen, CompletionParsed,
        ]

    def test_plan_and_completion_decoded(self, stream_text):
        _, events = feed_in_chunks(stream_text, 64)
        plan = next(e for e in events if isinstance(e, PlanParsed)).plan
        summary = next(e for e in events if isinstance(e, CompletionParsed)).summary
        assert [entry.path for entry in plan.files] == ["src/App.tsx", "src/components/Hero.tsx"]
        assert summary.files_generated == 2
        assert summary.success is True

    def test_markers_split_across_chunks(self, stream_text):
        _, events = feed_in_chunks(stream_text, 1)
        closed = [e.file for e in events if isinstance(e, FileClosed)]
        assert closed == extract_files(stream_text).files

    def test_same_result_for_any_chunking(self, stream_text):
        expected = feed_in_chunks(stream_text, len(stream_text))[1]
        for size in (1, 2, 3, 7, 13):
            assert feed_in_chunks(stream_text, size)[1] == expected

    def test_open_file_tracked(self):
        scanner = MarkerScanner()
        scanner.feed("[FILE:src/App.tsx]\nexport def")
        assert scanner.state == ScanState.IN_FILE
        assert scanner.open_path == "src/App.tsx"

    def test_invalid_plan_yields_none(self):
        events = MarkerScanner().feed("[PLAN]not json[/PLAN]")
        assert events == [PlanParsed(plan=None, raw="not json")]

    def test_brackets_in_file_content(self):
        events = MarkerScanner().feed("[FILE:a.ts]const xs = [1, 2][0];[/FILE]")
        assert events[-1].file.content == "const xs = [1, 2][0];"

    def test_unclosed_plan_ends_at_next_marker(self):
        events = MarkerScanner().feed('[PLAN]{"files": []}\n[FILE:a.js]x[/FILE]')
        assert [type(e) for e in events] == [PlanParsed, FileOpened, FileClosed]
        assert events[0].plan is not None
        assert events[0].raw == '{"files": []}\n'

    def test_unclosed_completion_ends_at_next_marker(self):
        scanner, events = feed_in_chunks("[COMPLETE]oops[PLAN]{}[/PLAN]", 3)
        assert [type(e) for e in events] == [CompleteSeen, CompletionParsed, PlanParsed]
        assert events[1] == CompletionParsed(summary=None, raw="oops")
        assert scanner.state == ScanState.AWAITING_MARKER

    def test_unclosed_plan_split_across_chunks(self):
        text = "[PLAN]{broken\n[FILE:src/a.ts]const a = 1;[/FILE][COMPLETE]"
        expected = feed_in_chunks(text, len(text))[1]
        for size in (1, 2, 4):
            assert feed_in_chunks(text, size)[1] == expected

    def test_bracket_in_path_split_across_chunks(self):
        text = "[FILE:src/a[b]const x = 1;[/FILE]"
        for size in (1, 3, 13):
            _, events = feed_in_chunks(text, size)
            closed = [e.file for e in events if isinstance(e, FileClosed)]
            assert closed == extract_files(text).files
            assert closed[0].path == "src/a[b"

    def test_text_outside_markers_ignored(self):
        scanner = MarkerScanner()
        events = scanner.feed("Sure! Here is the code [x] for you.\n[FILE:a.js]x[/FILE]")
        assert [type(e) for e in events] == [FileOpened, FileClosed]
