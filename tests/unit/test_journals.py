"""Unit tests for journal requirement lookup."""

import pytest

from paperforge.contexts.submission import (
    InMemoryJournalDirectory,
    JournalNotFoundError,
    JournalRequirements,
    YamlJournalDirectory,
)


@pytest.fixture
def packaged():
    return YamlJournalDirectory()


@pytest.mark.unit
class TestYamlJournalDirectory:
    def test_packaged_catalog_loads(self, packaged):
        names = [j.name for j in packaged.journals()]

        assert "Nature" in names
        assert "PLOS ONE" in names

    def test_nested_sections_flattened(self, packaged):
        nature = packaged.find_journal("Nature")

        assert nature.page_limit == 5
        assert nature.abstract_word_limit == 150
        assert nature.reference_style == "nature"
        assert nature.cover_letter_required is True

    def test_null_limits_are_none(self, packaged):
        assert packaged.find_journal("PLOS ONE").page_limit is None

    def test_custom_file(self, tmp_path):
        path = tmp_path / "journals.yaml"
        path.write_text(
            "journals:\n"
            "  - name: Annals of Testing\n"
            "    aliases: [AoT]\n"
            "    formatting:\n"
            "      page_limit: 12\n"
        )

        journal = YamlJournalDirectory(path).find_journal("aot")

        assert journal.name == "Annals of Testing"
        assert journal.page_limit == 12
        assert journal.reference_style == "plain"


@pytest.mark.unit
class TestFindJournal:
    @pytest.fixture
    def directory(self):
        return InMemoryJournalDirectory(
            [
                JournalRequirements(name="Nature Machine Intelligence"),
                JournalRequirements(name="Nature", aliases=["nat"]),
                JournalRequirements(name="IEEE Transactions on Pattern Analysis", aliases=["TPAMI"]),
            ]
        )

    def test_exact_name_beats_substring(self, directory):
        assert directory.find_journal("nature").name == "Nature"

    def test_alias(self, directory):
        assert directory.find_journal("tpami").name.startswith("IEEE")

    def test_substring(self, directory):
        assert directory.find_journal("Machine").name == "Nature Machine Intelligence"

    def test_not_found(self, directory):
        with pytest.raises(JournalNotFoundError) as excinfo:
            directory.find_journal("Obscure Letters")

        assert excinfo.value.journal_name == "Obscure Letters"
        assert "Nature" in str(excinfo.value)

    def test_round_trip_through_dict(self):
        journal = JournalRequirements(name="Nature", page_limit=5, cover_letter_required=True)
        assert JournalRequirements.from_dict(journal.to_dict()) == journal
