"""
Pytest configuration and shared fixtures.
"""

from pathlib import Path
from typing import List

import pytest

from c_style_checker import StyleChecker, StyleMode
from c_style_checker.issue import Diagnostic, Severity


CLEAN_KR_SOURCE = """\
#include <stdio.h>
#include <stdlib.h>

#include "list.h"

#define MAX_ITEMS 16
#define SQUARE(x) ((x) * (x))

typedef struct listNode {
  int value;
  struct listNode *next;
} list_node_t;

enum color {
  COLOR_RED,
  COLOR_GREEN = 4
};

static int counter = 0;

int list_count(const list_node_t *head)
{
  int count = 0;

  while (head != NULL) {
    count++;
    head = head->next;
  }
  return count;
}

void list_fill(int *values, int count)
{
  int i = 0;

  for (i = 0; i < count; i++) {
    values[i] = i;
  }
}

int main(void)
{
  int total = list_count(NULL);

  if (total > 0) {
    printf("%d\\n", total);
  } else {
    printf("empty\\n");
  }
  return 0;
}
"""


CLEAN_ALLMAN_SOURCE = """\
int main(void)
{
  int x = 1;

  if (x)
  {
    x = 0;
  }
  else
  {
    x = 1;
  }
  return x;
}
"""


# =============================================================================
# HELPERS
# =============================================================================

def kinds(diagnostics: List[Diagnostic]) -> List[str]:
    return [d.kind for d in diagnostics]


def errors(diagnostics: List[Diagnostic]) -> List[Diagnostic]:
    return [d for d in diagnostics if d.severity is Severity.ERROR]


def warnings(diagnostics: List[Diagnostic]) -> List[Diagnostic]:
    return [d for d in diagnostics if d.severity is Severity.WARNING]


def in_function(*body: str) -> str:
    """Wrap body lines (already indented) in a minimal definition."""
    return "void test_run(void)\n{\n" + "".join(line + "\n" for line in body) + "}\n"


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def check():
    """Run the full checker on source text."""
    def _check(source: str, style: str = "kr", path: str = "input.c") -> List[Diagnostic]:
        return StyleChecker(StyleMode.parse(style)).check_source(source, path)
    return _check


@pytest.fixture
def c_file(tmp_path):
    """Write a C file into a temporary directory and return its path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
