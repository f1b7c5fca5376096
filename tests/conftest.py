from __future__ import annotations

import textwrap

import pytest


def _style(body: str, *, title: str) -> str:
    slug = title.lower().replace(" ", "-")
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<style xmlns="http://purl.org/net/xbiblio/csl" class="in-text" version="1.0">\n'
        "  <info>\n"
        f"    <title>{title}</title>\n"
        f"    <id>http://example.org/styles/{slug}</id>\n"
        "    <updated>2026-01-01T00:00:00+00:00</updated>\n"
        "  </info>\n"
        f"{body}\n"
        "</style>\n"
    )


CITATION = """\
  <citation>
    <layout delimiter="; ">
      <text variable="title"/>
    </layout>
  </citation>"""

SORTED_STYLE = _style(
    CITATION
    + """
  <bibliography>
    <sort>
      <key variable="title"/>
    </sort>
    <layout>
      <text variable="title"/>
    </layout>
  </bibliography>""",
    title="Sorted by title",
)

UNSORTED_STYLE = _style(
    CITATION
    + """
  <bibliography>
    <layout>
      <text variable="title"/>
    </layout>
  </bibliography>""",
    title="Citation order",
)

CITATIONS_ONLY_STYLE = _style(CITATION, title="Citations only")

DEPENDENT_STYLE = textwrap.dedent(
    """\
    <?xml version="1.0" encoding="utf-8"?>
    <style xmlns="http://purl.org/net/xbiblio/csl" class="in-text" version="1.0">
      <info>
        <title>Journal of Dependent Results</title>
        <id>http://example.org/styles/dependent</id>
        <link href="http://www.zotero.org/styles/apa" rel="independent-parent"/>
        <updated>2026-01-01T00:00:00+00:00</updated>
      </info>
    </style>
    """
)

XYZ_STRUCTURED = textwrap.dedent(
    """\
    entries:
      x:
        type: article
        title: Ex
        year: 2001
        author:
          - {first: Anne, last: Xavier}
      y:
        type: book
        title: Why
        year: 2002
        author:
          - {first: Yann, last: Young}
      z:
        type: misc
        title: Zed
        year: 2003
    """
)


@pytest.fixture
def sorted_style() -> str:
    return SORTED_STYLE


@pytest.fixture
def unsorted_style() -> str:
    return UNSORTED_STYLE


@pytest.fixture
def citations_only_style() -> str:
    return CITATIONS_ONLY_STYLE


@pytest.fixture
def dependent_style() -> str:
    return DEPENDENT_STYLE


@pytest.fixture
def xyz_structured() -> str:
    return XYZ_STRUCTURED
