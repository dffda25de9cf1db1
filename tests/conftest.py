# tests/conftest.py
"""
Shared fixtures and source snippets for the Splc semantic analysis tests.
"""

import pytest

from analyzer import AnalysisResult, SemanticAnalyzer
from errors import SemanticErrorKind
from parser import parse


REDECL = SemanticErrorKind.REDECLARATION
REDEF = SemanticErrorKind.REDEFINITION
UNDECL = SemanticErrorKind.UNDECLARED_USE
INCOMPLETE = SemanticErrorKind.INCOMPLETE_TYPE_DEFINITION


CLEAN_PROGRAM_SPLC = """\
struct point { int x; int y; };
int counter;
char buf[16];
struct point origin;
int *cells[4];
int (*row)[8];
int add(int a, int b);
int add(int a, int b) {
    int total = a + b;
    return total;
}
int main() {
    struct point p;
    p.x = add(counter, 2);
    buf[0] = 'a';
    return 0;
}
"""

SHADOWING_SPLC = """\
int x;
int f() {
    int x;
    x;
}
"""

FORWARD_GLOBAL_STRUCT_SPLC = """\
struct S s;
struct S { int x; };
"""

FORWARD_LOCAL_STRUCT_SPLC = """\
struct S;
int f() {
    struct S s;
}
struct S { int x; };
"""


def analyze_source(source: str) -> AnalysisResult:
    """Parse and analyze *source* with a fresh analyzer."""
    return SemanticAnalyzer().analyze(parse(source))


def error_kinds(result: AnalysisResult):
    return [e.kind for e in result.errors]


def error_names(result: AnalysisResult):
    return [e.name for e in result.errors]


@pytest.fixture
def analyze():
    return analyze_source
