"""Fixed detection and replacement rules for unsafe file access."""

from .models import DetectionRule, ReplacementRule, Severity

# Validated read that replaces a bare os.ReadFile(filePath) call in a Go handler
SAFE_READ_FILE = """safePath := filepath.Clean(filePath)
if strings.Contains(safePath, "..") {
\thttp.Error(w, "Access denied", http.StatusForbidden)
\treturn
}
data, err := os.ReadFile(safePath)"""

DETECTION_RULES: list[DetectionRule] = [
    DetectionRule(
        name="arbitrary_file_read",
        substrings=["os.ReadFile("],
        severity=Severity.high,
        message="Possible arbitrary file read vulnerability: `os.ReadFile(filePath)` detected.",
        cwe="CWE-73",
    ),
    DetectionRule(
        name="path_traversal",
        substrings=["../", "..\\"],
        severity=Severity.high,
        message="Possible path traversal attack detected: '../' or '..\\'.",
        cwe="CWE-22",
    ),
]

# Offered and applied in list order
REPLACEMENT_RULES: list[ReplacementRule] = [
    ReplacementRule(pattern="os.ReadFile(filePath)", replacement=SAFE_READ_FILE),
    ReplacementRule(pattern="../", replacement="safe_path/"),
    ReplacementRule(pattern="..\\", replacement="safe_path\\"),
]

REPLACEMENTS_BY_PATTERN: dict[str, ReplacementRule] = {
    rule.pattern: rule for rule in REPLACEMENT_RULES
}
