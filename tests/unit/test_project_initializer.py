"""Unit tests for ProjectInitializer and the project manifest."""

import json

import pytest

from paperforge.contexts.templating import (
    AuthorInfo,
    FileKind,
    ProjectInitializer,
    ProjectMetadata,
    TemplateFile,
    load_manifest,
)
from paperforge.contexts.templating.project_initializer import substitute_placeholders
from paperforge.contexts.templating.project_manifest import MANIFEST_FILENAME
from paperforge.contexts.templating.sanitizer import remove_personal_info


@pytest.fixture
def initializer():
    return ProjectInitializer()


@pytest.mark.unit
class TestInitialize:
    def test_title_placeholder_replaced(self, initializer, tmp_path, make_template):
        template = make_template(
            main_content=r"\documentclass{article}\title{{{PROJECT_NAME}}}\begin{document}\end{document}",
        )

        result = initializer.initialize(
            "demo", tmp_path / "demo", template, project_metadata=ProjectMetadata(title="My Paper")
        )

        main = (tmp_path / "demo" / "main.tex").read_text()
        assert result.success
        assert r"\title{My Paper}" in main
        assert "PROJECT_NAME" not in main

    def test_directories_and_files(self, initializer, tmp_path, make_template):
        project = tmp_path / "demo"
        result = initializer.initialize("demo", project, make_template())

        for subdirectory in ("figures", "data", "sections"):
            assert (project / subdirectory).is_dir()
        assert result.files_created == ["main.tex", "references.bib", MANIFEST_FILENAME, "README.md"]
        assert result.manifest_written
        assert result.errors == []

    def test_unsupplied_fields_leave_placeholders(self, initializer, tmp_path, make_template):
        initializer.initialize("demo", tmp_path / "demo", make_template())

        main = (tmp_path / "demo" / "main.tex").read_text()
        assert r"\author{Your Name}" in main
        assert "keyword1, keyword2, keyword3" in main
        assert "your.email@university.edu" in main

    def test_manifest_contents(self, initializer, tmp_path, make_template):
        project = tmp_path / "demo"
        initializer.initialize(
            "demo",
            project,
            make_template("nature-template"),
            journal_target="Nature",
            author_info=AuthorInfo(name="Ada Lovelace", email="ada@lab.org"),
        )

        manifest = load_manifest(project)
        assert manifest.name == "demo"
        assert manifest.template_id == "nature-template"
        assert manifest.template_source == "local-cache"
        assert manifest.journal_target == "Nature"
        assert manifest.metadata["author"]["email"] == "ada@lab.org"
        assert json.loads((project / MANIFEST_FILENAME).read_text())["template"]["id"] == (
            "nature-template"
        )

    def test_guide_rendered(self, initializer, tmp_path, make_template):
        project = tmp_path / "demo"
        initializer.initialize(
            "demo",
            project,
            make_template(),
            journal_target="PLOS ONE",
            project_metadata=ProjectMetadata(title="My Paper", keywords=["graphs", "proofs"]),
        )

        guide = (project / "README.md").read_text()
        assert guide.startswith("# My Paper")
        assert "**Target Journal**: PLOS ONE" in guide
        assert "graphs, proofs" in guide
        assert "pdflatex main.tex" in guide
        assert "`references.bib`" in guide

    def test_nested_template_paths(self, initializer, tmp_path, make_template):
        template = make_template()
        template.files.append(TemplateFile("sections/intro.tex", "Intro", FileKind.DOCUMENT))

        result = initializer.initialize("demo", tmp_path / "demo", template)

        assert (tmp_path / "demo" / "sections" / "intro.tex").read_text() == "Intro"
        assert "sections/intro.tex" in result.files_created

    def test_path_outside_project_skipped(self, initializer, tmp_path, make_template):
        template = make_template()
        template.files.append(TemplateFile("../escape.tex", "x", FileKind.DOCUMENT))

        result = initializer.initialize("demo", tmp_path / "demo", template)

        assert not (tmp_path / "escape.tex").exists()
        assert result.success
        assert any("escape.tex" in w for w in result.warnings)

    def test_missing_entry_point_warns(self, initializer, tmp_path, make_template):
        template = make_template()
        template.files[0].required = False

        result = initializer.initialize("demo", tmp_path / "demo", template)

        assert result.success
        assert any("no single required document" in w for w in result.warnings)

    def test_failure_reported_not_raised(self, initializer, tmp_path, make_template):
        blocker = tmp_path / "taken"
        blocker.write_text("a file where the project directory should go")

        result = initializer.initialize("demo", blocker, make_template())

        assert not result.success
        assert result.errors and "demo" in result.errors[0]
        assert not result.manifest_written

    def test_retry_overwrites(self, initializer, tmp_path, make_template):
        project = tmp_path / "demo"
        initializer.initialize("demo", project, make_template())
        (project / "main.tex").write_text("edited")

        result = initializer.initialize("demo", project, make_template())

        assert result.success
        assert (project / "main.tex").read_text() != "edited"


@pytest.mark.unit
class TestSubstitutePlaceholders:
    def test_author_with_affiliation(self):
        result = substitute_placeholders(
            r"\author{Your Name}", AuthorInfo(name="Ada", affiliation="Lab"), None
        )
        assert result == r"\author{Ada\thanks{Lab}}"

    def test_affiliation_command_filled(self):
        template = remove_personal_info(r"\author{Ada}\affiliation{MIT}")

        result = substitute_placeholders(
            template, AuthorInfo(name="Grace", affiliation="Yale"), None
        )

        assert result == r"\author{Grace}\affiliation{Yale}"

    def test_institute_command_filled(self):
        result = substitute_placeholders(
            r"\author{Your Name}\institute{Your Institution}",
            AuthorInfo(name="Grace", affiliation="Yale"),
            None,
        )
        assert result == r"\author{Grace}\institute{Yale}"

    def test_ieee_author_blocks_filled(self):
        latex = r"\author{\IEEEauthorblockN{Your Name}\IEEEauthorblockA{Your Institution}}"

        result = substitute_placeholders(
            latex, AuthorInfo(name="Grace", affiliation="Yale"), None
        )

        assert result == r"\author{\IEEEauthorblockN{Grace}\IEEEauthorblockA{Yale}}"

    def test_email_inside_affiliation_block_survives(self):
        latex = "\\IEEEauthorblockA{Your Institution \\\\\nyour.email@university.edu}"

        result = substitute_placeholders(
            latex, AuthorInfo(name="Grace", email="grace@yale.edu", affiliation="Yale"), None
        )

        assert result == "\\IEEEauthorblockA{Yale \\\\\ngrace@yale.edu}"

    def test_email(self):
        result = substitute_placeholders(
            "mail: your.email@university.edu", AuthorInfo(name="Ada", email="ada@lab.org"), None
        )
        assert result == "mail: ada@lab.org"

    def test_abstract_replaced_once(self):
        latex = "\\begin{abstract}\nOld.\n\\end{abstract}"
        result = substitute_placeholders(latex, None, ProjectMetadata(abstract="New abstract."))
        assert result == "\\begin{abstract}\nNew abstract.\n\\end{abstract}"

    def test_abstract_with_backslashes(self):
        latex = "\\begin{abstract}\nOld.\n\\end{abstract}"
        result = substitute_placeholders(latex, None, ProjectMetadata(abstract=r"We use \LaTeX."))
        assert r"We use \LaTeX." in result

    def test_keywords(self):
        result = substitute_placeholders(
            "keyword1, keyword2, keyword3", None, ProjectMetadata(keywords=["a", "b"])
        )
        assert result == "a, b"
