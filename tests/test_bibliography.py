import textwrap

import pytest

from bibresolve.core.bibliography import (
    Library,
    RawSource,
    SourceFormat,
    entry_to_csl,
    parse_format_hint,
    parse_source,
)
from bibresolve.core.diagnostics import NullEmitter
from bibresolve.core.exceptions import SchemaError


def _bib(payload: str) -> str:
    return textwrap.dedent(payload).strip() + "\n"


SMITH = _bib(
    """
    @article{smith2020,
        title = {Example Article},
        author = {Smith, John},
        year = {2020},
        journal = {Journal of Testing},
    }
    """
)

DOE = _bib(
    """
    @book{doe2021,
        title = {Example Book},
        author = {Doe, Jane},
        year = {2021},
        publisher = {Publishing House},
    }
    """
)


class RecordingEmitter(NullEmitter):
    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.events: list[tuple[str, dict]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def event(self, name, payload) -> None:
        self.events.append((name, dict(payload)))


def test_library_merges_bibtex_and_structured_sources(xyz_structured: str) -> None:
    library = Library.from_sources(
        [
            RawSource(SMITH, SourceFormat.BIBTEX),
            RawSource(xyz_structured, SourceFormat.STRUCTURED),
            RawSource(DOE),
        ]
    )

    assert library.keys() == ["smith2020", "x", "y", "z", "doe2021"]
    smith = library.get("smith2020")
    assert smith is not None
    assert smith.fields["title"] == "Example Article"
    assert [str(person) for person in smith.persons["author"]] == ["Smith, John"]
    assert not library.issues


def test_empty_source_list_yields_empty_library() -> None:
    library = Library.from_sources([])

    assert len(library) == 0
    assert library.keys() == []


def test_blank_source_is_an_empty_bibliography() -> None:
    library = Library.from_sources([RawSource("   \n", SourceFormat.STRUCTURED)])

    assert len(library) == 0


def test_auto_detection_prefers_structured_format(xyz_structured: str) -> None:
    data, detected = parse_source(RawSource(xyz_structured))

    assert detected is SourceFormat.STRUCTURED
    assert list(data.entries) == ["x", "y", "z"]


def test_auto_detection_falls_back_to_bibtex() -> None:
    data, detected = parse_source(RawSource("@article{a, title={T1}}"))

    assert detected is SourceFormat.BIBTEX
    assert list(data.entries) == ["a"]


def test_unrecognized_payload_fails_the_merge() -> None:
    with pytest.raises(SchemaError, match="Unrecognized bibliography schema"):
        Library.from_sources(
            [
                RawSource(SMITH),
                RawSource("just a few words of prose", label="notes.txt"),
            ]
        )


def test_bibtex_hint_does_not_fall_back(xyz_structured: str) -> None:
    with pytest.raises(SchemaError):
        parse_source(RawSource(xyz_structured, SourceFormat.BIBTEX))


def test_structured_hint_does_not_fall_back() -> None:
    with pytest.raises(SchemaError):
        parse_source(RawSource(SMITH, SourceFormat.STRUCTURED))


def test_structured_entry_without_type_is_rejected() -> None:
    payload = "entries:\n  a:\n    title: Untyped\n"

    with pytest.raises(SchemaError, match="type"):
        parse_source(RawSource(payload, SourceFormat.STRUCTURED))


def test_repeated_key_inside_one_bibtex_source_is_rejected() -> None:
    payload = SMITH + SMITH.replace("Example Article", "Other Article")

    with pytest.raises(SchemaError):
        parse_source(RawSource(payload, SourceFormat.BIBTEX))


def test_redefined_key_replaces_entry_in_place_and_reports_issue() -> None:
    original = "@article{dup, title={Original Title}}\n@article{after, title={After}}"
    updated = "@article{dup, title={Updated Title}}"
    emitter = RecordingEmitter()

    library = Library.from_sources(
        [RawSource(original, label="one.bib"), RawSource(updated, label="two.bib")],
        emitter=emitter,
    )

    assert library.keys() == ["dup", "after"]
    entry = library.get("dup")
    assert entry is not None
    assert entry.fields["title"] == "Updated Title"

    (issue,) = library.issues
    assert issue.key == "dup"
    assert issue.source == "two.bib"
    assert "conflicts" in issue.message
    assert emitter.warnings
    assert ("entry_replaced", {"key": "dup", "source": "two.bib"}) in emitter.events


def test_identical_redefinition_is_silent() -> None:
    library = Library.from_sources([RawSource(SMITH), RawSource(SMITH)])

    assert library.keys() == ["smith2020"]
    assert not library.issues


def test_keys_are_case_sensitive() -> None:
    library = Library.from_sources(
        [RawSource("@misc{Knuth84, title={TeX}}"), RawSource("@misc{knuth84, title={METAFONT}}")]
    )

    assert library.keys() == ["Knuth84", "knuth84"]
    assert "Knuth84" in library
    assert "KNUTH84" not in library
    assert not library.issues


def test_case_variants_cannot_be_exported_together() -> None:
    library = Library.from_sources(
        [RawSource("@misc{key, title={One}}"), RawSource("@misc{Key, title={Two}}")]
    )

    with pytest.raises(SchemaError, match="Cannot export"):
        library.to_bibtex()


def test_hayagriva_document_is_read_as_structured() -> None:
    payload = textwrap.dedent(
        """\
        doe2023:
          type: Article
          title: A Minimal Example
          author: ["Doe, Jane", "Roe, John"]
          date: 2023-05
          page-range: 10-20
          parent:
            type: periodical
            title: Journal of Examples
            volume: 12
        knuth84:
          type: book
          title: {value: The TeXbook}
          author: Knuth, Donald
          date: 1984
          publisher: {name: Addison-Wesley, location: Reading}
          serial-number: {isbn: 0-201-13447-0}
        """
    )

    data, detected = parse_source(RawSource(payload, label="refs.yml"))

    assert detected is SourceFormat.STRUCTURED
    assert list(data.entries) == ["doe2023", "knuth84"]
    doe = data.entries["doe2023"]
    assert doe.type == "article"
    assert [str(person) for person in doe.persons["author"]] == ["Doe, Jane", "Roe, John"]
    assert doe.fields["journal"] == "Journal of Examples"
    assert doe.fields["volume"] == "12"
    assert doe.fields["year"] == "2023"
    assert doe.fields["month"] == "5"
    assert doe.fields["pages"] == "10-20"
    knuth = data.entries["knuth84"]
    assert knuth.fields["title"] == "The TeXbook"
    assert knuth.fields["publisher"] == "Addison-Wesley"
    assert knuth.fields["address"] == "Reading"
    assert knuth.fields["isbn"] == "0-201-13447-0"
    assert [str(person) for person in knuth.persons["author"]] == ["Knuth, Donald"]


def test_hayagriva_entry_without_type_is_not_structured() -> None:
    payload = "doe2023:\n  title: Untyped\n"

    with pytest.raises(SchemaError, match="must map citation keys"):
        parse_source(RawSource(payload, SourceFormat.STRUCTURED))


def test_pybtex_yaml_requires_name_parts() -> None:
    payload = "entries:\n  a:\n    type: book\n    author: [Doe, Jane]\n"

    with pytest.raises(SchemaError, match="Invalid structured bibliography"):
        parse_source(RawSource(payload, SourceFormat.STRUCTURED))


def test_structured_export_round_trips(xyz_structured: str) -> None:
    library = Library.from_sources([RawSource(SMITH), RawSource(xyz_structured)])

    exported = library.to_structured()
    reloaded = Library.from_sources([RawSource(exported)])

    assert reloaded.keys() == library.keys()
    smith = reloaded.get("smith2020")
    assert smith is not None
    assert smith.fields["journal"] == "Journal of Testing"
    assert [str(person) for person in smith.persons["author"]] == ["Smith, John"]


def test_bibtex_export_round_trips(xyz_structured: str) -> None:
    library = Library.from_sources([RawSource(xyz_structured), RawSource(DOE)])

    reloaded = Library.from_sources([RawSource(library.to_bibtex(), SourceFormat.BIBTEX)])

    assert set(reloaded.keys()) == {"x", "y", "z", "doe2021"}


def test_source_parsed_events_are_emitted(xyz_structured: str) -> None:
    emitter = RecordingEmitter()

    Library.from_sources([RawSource(xyz_structured, label="refs.yml")], emitter=emitter)

    assert emitter.events == [
        ("source_parsed", {"source": "refs.yml", "format": "structured", "entries": 3})
    ]


@pytest.mark.parametrize(
    ("hint", "expected"),
    [
        ("bib", SourceFormat.BIBTEX),
        ("yml", SourceFormat.STRUCTURED),
        ("YAML", SourceFormat.STRUCTURED),
        ("bytes", SourceFormat.UNKNOWN),
        (None, SourceFormat.UNKNOWN),
    ],
)
def test_parse_format_hint(hint: str | None, expected: SourceFormat) -> None:
    assert parse_format_hint(hint) is expected


def test_parse_format_hint_rejects_unknown_tags() -> None:
    with pytest.raises(ValueError, match="csv"):
        parse_format_hint("csv")


def test_entry_to_csl_maps_bibtex_fields() -> None:
    payload = _bib(
        r"""
        @inproceedings{vdb2019,
            title = {{Deep} Results \& More},
            author = {van der Berg, Jan and Roe, Richard},
            booktitle = {Proceedings of Things},
            pages = {10--20},
            year = {2019},
            month = mar,
        }
        """
    )
    library = Library.from_sources([RawSource(payload)])
    entry = library.get("vdb2019")
    assert entry is not None

    item = entry_to_csl("vdb2019", entry)

    assert item["id"] == "vdb2019"
    assert item["type"] == "paper-conference"
    assert item["title"] == "Deep Results & More"
    assert item["container-title"] == "Proceedings of Things"
    assert item["page"] == "10-20"
    assert item["issued"] == {"date-parts": [[2019, 3]]}
    assert item["author"][0] == {
        "family": "Berg",
        "given": "Jan",
        "non-dropping-particle": "van der",
    }
    assert item["author"][1] == {"family": "Roe", "given": "Richard"}


def test_entry_to_csl_decodes_latex_accents() -> None:
    payload = _bib(
        r"""
        @book{ozturk2020,
            title = {Caf{\'e} Culture in {M{\"u}nchen}},
            author = {{\"O}zt{\"u}rk, Ay{\c{s}}e},
            publisher = {M{\"u}ller~\& S{\"o}hne},
            url = {https://example.org/a_b--c},
            year = {2020},
        }
        """
    )
    library = Library.from_sources([RawSource(payload)])
    entry = library.get("ozturk2020")
    assert entry is not None

    item = entry_to_csl("ozturk2020", entry)

    assert item["author"] == [{"family": "Öztürk", "given": "Ayşe"}]
    assert item["title"] == "Café Culture in München"
    assert item["publisher"] == "Müller & Söhne"
    assert item["URL"] == "https://example.org/a_b--c"
