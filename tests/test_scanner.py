"""Tests for substring scanning."""

from traversal_fixer.models import Severity
from traversal_fixer.scanner import (
    find_candidates,
    find_line_number,
    format_warning,
    read_source,
    scan_code,
    summarize,
)

from samples import CLEAN_CODE, TRAVERSAL_ONLY, VULNERABLE_HANDLER


class TestReadSource:
    """Test file reading."""

    def test_read_existing_file(self, vulnerable_file):
        """Test reading a file returns its content and no error."""
        content, error = read_source(vulnerable_file)
        assert error is None
        assert content == VULNERABLE_HANDLER

    def test_read_missing_file(self, tmp_path):
        """Test reading a missing file returns a not-found error."""
        content, error = read_source(tmp_path / "missing.go")
        assert content == ""
        assert error.startswith("File not found")

    def test_read_directory(self, tmp_path):
        """Test reading a directory returns an error instead of raising."""
        content, error = read_source(tmp_path)
        assert content == ""
        assert error is not None

    def test_read_preserves_crlf(self, tmp_path):
        """Test Windows line endings survive reading."""
        path = tmp_path / "crlf.go"
        path.write_bytes(b"line one\r\nos.ReadFile(filePath)\r\n")
        content, error = read_source(path)
        assert error is None
        assert "\r\n" in content

    def test_read_non_utf8_file(self, tmp_path):
        """Test binary content is reported, not decoded."""
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xff\xfe\x00\x80")
        content, error = read_source(path)
        assert content == ""
        assert "UTF-8" in error


class TestFindLineNumber:
    """Test first-occurrence line lookup."""

    def test_first_line(self):
        assert find_line_number("../a\nb", "../") == 1

    def test_later_line(self):
        assert find_line_number(VULNERABLE_HANDLER, "os.ReadFile(filePath)") == 12

    def test_first_of_many(self):
        """Test only the first occurrence is reported."""
        assert find_line_number(TRAVERSAL_ONLY, "../") == 3

    def test_absent_pattern(self):
        assert find_line_number(CLEAN_CODE, "../") == -1


class TestScanCode:
    """Test detection rules."""

    def test_file_read_detected(self):
        """Test os.ReadFile( triggers the arbitrary file read rule."""
        findings = scan_code(VULNERABLE_HANDLER)
        assert [f.rule for f in findings] == ["arbitrary_file_read"]
        assert findings[0].severity == Severity.high
        assert findings[0].line == 12
        assert findings[0].matched == "os.ReadFile("

    def test_read_file_with_other_argument(self):
        """Test detection only needs the call prefix, not filePath."""
        findings = scan_code("data, _ := os.ReadFile(name)")
        assert [f.rule for f in findings] == ["arbitrary_file_read"]

    def test_unix_traversal_detected(self):
        findings = scan_code('open("../secret")')
        assert [f.rule for f in findings] == ["path_traversal"]
        assert findings[0].matched == "../"

    def test_windows_traversal_detected(self):
        findings = scan_code('open("..\\\\secret")')
        assert [f.rule for f in findings] == ["path_traversal"]
        assert findings[0].matched == "..\\"

    def test_both_rules_in_order(self):
        """Test rules fire in their fixed order with one finding each."""
        code = VULNERABLE_HANDLER + TRAVERSAL_ONLY
        findings = scan_code(code)
        assert [f.rule for f in findings] == ["arbitrary_file_read", "path_traversal"]

    def test_clean_code(self):
        assert scan_code(CLEAN_CODE) == []

    def test_double_dot_without_separator_is_clean(self):
        """Test '..' alone is not a traversal sequence."""
        assert scan_code('if strings.Contains(p, "..") {}') == []

    def test_format_warning(self):
        finding = scan_code('"../"')[0]
        assert format_warning(finding) == (
            "[WARNING] Possible path traversal attack detected: '../' or '..\\'."
        )


class TestFindCandidates:
    """Test replacement candidate listing."""

    def test_candidates_for_traversal(self):
        candidates = find_candidates(TRAVERSAL_ONLY)
        assert [c.pattern for c in candidates] == ["../", "..\\"]
        assert candidates[0].line == 3
        assert candidates[0].occurrences == 2
        assert candidates[1].line == 4
        assert candidates[1].replacement == "safe_path\\"

    def test_bare_read_file_call_has_no_candidate(self):
        """Test only the exact os.ReadFile(filePath) call has a replacement."""
        assert find_candidates("os.ReadFile(name)") == []


class TestSummarize:
    """Test severity summary."""

    def test_counts(self):
        summary = summarize(scan_code(VULNERABLE_HANDLER + TRAVERSAL_ONLY))
        assert summary.total == 2
        assert summary.high == 2
        assert summary.critical == 0

    def test_empty(self):
        summary = summarize([])
        assert summary.total == 0
