"""Unit tests for submission packaging and cleanup."""

import pytest

from paperforge.contexts.submission import clean_project, create_submission_package


@pytest.fixture
def project(tmp_path):
    path = tmp_path / "paper"
    (path / "figures" / "plots").mkdir(parents=True)
    (path / "figures" / "plots" / "loss.png").write_bytes(b"png")
    (path / "figures" / "arch.pdf").write_bytes(b"pdf")
    for name in ("main.tex", "references.bib", "main.pdf", "journal.cls", "macros.sty"):
        (path / name).write_text(name)
    for name in ("main.aux", "main.log", "notes.txt"):
        (path / name).write_text(name)
    (path / "data").mkdir()
    (path / "data" / "results.csv").write_text("a,b")
    return path


@pytest.mark.unit
class TestCreateSubmissionPackage:
    def test_copies_submittable_root_files(self, project, tmp_path):
        package = create_submission_package(project, tmp_path / "out")

        root_names = sorted(p.name for p in package.path.iterdir() if p.is_file())
        assert root_names == ["journal.cls", "macros.sty", "main.pdf", "main.tex", "references.bib"]

    def test_mirrors_figures(self, project, tmp_path):
        package = create_submission_package(project, tmp_path / "out")

        assert (package.path / "figures" / "plots" / "loss.png").read_bytes() == b"png"
        assert "figures/plots/loss.png" in package.files
        assert not (package.path / "data").exists()

    def test_default_location_inside_project(self, project):
        package = create_submission_package(project)

        assert package.path.parent == project / "submission-package"
        assert package.path.name.startswith("submission-")

    def test_each_call_gets_fresh_directory(self, project, tmp_path):
        first = create_submission_package(project, tmp_path / "out")
        second = create_submission_package(project, tmp_path / "out")

        assert first.path != second.path
        assert first.path.exists() and second.path.exists()

    def test_missing_figures_tolerated(self, tmp_path):
        project = tmp_path / "bare"
        project.mkdir()
        (project / "main.tex").write_text("x")

        package = create_submission_package(project, tmp_path / "out")

        assert package.files == ["main.tex"]

    def test_missing_project_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            create_submission_package(tmp_path / "nowhere")


@pytest.mark.unit
class TestCleanProject:
    def test_removes_only_temporary_files(self, tmp_path):
        for name in ("main.aux", "main.log", "main.tex"):
            (tmp_path / name).write_text(name)

        removed = clean_project(tmp_path)

        assert removed == ["main.aux", "main.log"]
        assert (tmp_path / "main.tex").exists()
        assert not (tmp_path / "main.aux").exists()

    def test_all_artifact_extensions(self, tmp_path):
        names = ["a.aux", "a.bbl", "a.blg", "a.fdb_latexmk", "a.fls", "a.log", "a.out", "a.toc"]
        for name in names:
            (tmp_path / name).write_text("")

        assert clean_project(tmp_path) == sorted(names)
        assert list(tmp_path.iterdir()) == []

    def test_nothing_to_clean(self, tmp_path):
        assert clean_project(tmp_path) == []

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            clean_project(tmp_path / "nowhere")
