"""Tests for the command line entry point."""

from pathlib import Path
from typing import Callable

import pytest

from slog.cli import main


@pytest.fixture(autouse=True)
def in_tmp_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from tmp_path so a stray slog.toml is never picked up."""
    monkeypatch.chdir(tmp_path)


class TestAggregate:
    """Tests for the single page layout."""

    def test_page_on_stdout(
        self,
        write_post: Callable[..., Path],
        make_template: Callable[..., Path],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that all posts render into one escaped feed page on stdout."""
        first = write_post("a.md", id="alpha", title="A & B")
        second = write_post("b.md", id="beta", title="C")
        template = make_template(header="<rss>", item="<item>${title}|${daterss}</item>", footer="</rss>")
        main([str(template), str(first), str(second)])
        out = capsys.readouterr().out
        assert out == (
            "<rss><item>A &amp; B|Sun, 01 May 2022 14:30:00 +0000</item>"
            "<item>C|Sun, 01 May 2022 14:30:00 +0000</item></rss>"
        )

    def test_ids_validated_by_default(
        self,
        write_post: Callable[..., Path],
        make_template: Callable[..., Path],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that the single page layout rejects non-letter ids."""
        post = write_post("a.md", id="post1")
        with pytest.raises(SystemExit) as excinfo:
            main([str(make_template()), str(post)])
        assert excinfo.value.code == 1
        err = capsys.readouterr().err
        assert err.startswith("slog: ")
        assert "post1" in err
        assert str(post) in err

    def test_validation_can_be_disabled(
        self,
        write_post: Callable[..., Path],
        make_template: Callable[..., Path],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test --no-validate-ids and --mode html with a custom date format."""
        post = write_post("a.md", id="Post1", title="A & B")
        template = make_template(header="", item="${id} ${title} ${date}", footer="")
        main(["--no-validate-ids", "--mode", "html", "-f", "%d/%m/%Y", str(template), str(post)])
        assert capsys.readouterr().out == "Post1 A & B 01/05/2022"

    def test_duplicate_ids(
        self,
        write_post: Callable[..., Path],
        make_template: Callable[..., Path],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that a duplicate id aborts with nothing on stdout."""
        first = write_post("a.md", id="same")
        second = write_post("b.md", id="same")
        with pytest.raises(SystemExit) as excinfo:
            main([str(make_template()), str(first), str(second)])
        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "duplicate id 'same'" in captured.err


class TestPostPages:
    """Tests for the per-post layout."""

    def test_writes_pages(
        self,
        tmp_path: Path,
        write_post: Callable[..., Path],
        make_template: Callable[..., Path],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that -o writes one raw html page per post."""
        post = write_post("a.md", id="my-post", title="A & B", body="Hi")
        template = make_template(header="<html>", item="<h1>${title}</h1>${body}", footer="</html>")
        out_dir = tmp_path / "dist"
        main(["-o", str(out_dir), str(template), str(post)])
        assert (out_dir / "my-post.html").read_text(encoding="utf-8") == "<html><h1>A & B</h1><p>Hi</p></html>"
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Wrote 1 pages" in captured.err

    def test_config_file_defaults(
        self,
        tmp_path: Path,
        write_post: Callable[..., Path],
        make_template: Callable[..., Path],
    ) -> None:
        """Test that slog.toml supplies defaults for flags."""
        (tmp_path / "slog.toml").write_text(
            'output = "public"\nsuffix = ".htm"\ndate_format = "%Y"\n', encoding="utf-8"
        )
        post = write_post("a.md", id="one")
        template = make_template(header="", item="${date}", footer="")
        main([str(template), str(post)])
        assert (tmp_path / "public" / "one.htm").read_text(encoding="utf-8") == "2022"


class TestErrors:
    """Tests for failure exits."""

    def test_missing_template_file(
        self,
        tmp_path: Path,
        write_post: Callable[..., Path],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that a missing template exits 1 naming the file."""
        post = write_post("a.md")
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "none"), str(post)])
        assert excinfo.value.code == 1
        assert "header" in capsys.readouterr().err

    def test_unterminated_placeholder(
        self,
        write_post: Callable[..., Path],
        make_template: Callable[..., Path],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that a template syntax error exits 1."""
        post = write_post("a.md")
        with pytest.raises(SystemExit) as excinfo:
            main([str(make_template(item="${title")), str(post)])
        assert excinfo.value.code == 1
        assert "missing closing bracket" in capsys.readouterr().err

    def test_bad_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that an invalid config file exits 1."""
        (tmp_path / "bad.json").write_text("{", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["--config", str(tmp_path / "bad.json"), "tmpl", "a.md"])
        assert excinfo.value.code == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_usage_error(self) -> None:
        """Test that missing arguments are a usage error."""
        with pytest.raises(SystemExit) as excinfo:
            main(["only-template"])
        assert excinfo.value.code == 2

    def test_nul_in_page_id(
        self,
        tmp_path: Path,
        write_post: Callable[..., Path],
        make_template: Callable[..., Path],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that an id unusable as a file name exits 1 with one diagnostic."""
        post = write_post("a.md", id="a\x00b")
        with pytest.raises(SystemExit) as excinfo:
            main(["-o", str(tmp_path / "dist"), str(make_template()), str(post)])
        assert excinfo.value.code == 1
        err = capsys.readouterr().err
        assert err.startswith("slog: ")
        assert "cannot be used as a file name" in err
