"""Tests for request, filename and specifier parsing."""

import pytest

from errors import InvalidFormatError
from versioning.models import PackageIdentity, VersionKind, VersionSpecifier
from versioning.parser import (
    is_valid_name,
    parse_filename,
    parse_request,
    parse_specifier,
    read_packages_from_file,
)


class TestParseRequest:
    """NAME and NAME@VERSION request text."""

    def test_bare_name_is_latest(self):
        pkg = parse_request("foo")
        assert pkg.name == "foo"
        assert pkg.version.kind is VersionKind.LATEST
        assert pkg.version == VersionSpecifier.latest()

    def test_literal_version(self):
        pkg = parse_request("foo@1.2.3")
        assert pkg.version.kind is VersionKind.LITERAL
        assert pkg.version.raw == "1.2.3"
        assert pkg.version.specifier.release == "1.2.3"

    def test_latest_keyword_any_case(self):
        assert parse_request("foo@latest").version.is_latest
        assert parse_request("foo@LATEST").version.is_latest

    def test_literal_outside_grammar_is_kept_verbatim(self):
        pkg = parse_request("foo@nightly")
        assert pkg.version.raw == "nightly"
        assert pkg.version.specifier is None

    def test_operator_is_parsed(self):
        spec = parse_request("foo@~=1.4").version.specifier
        assert spec.op == "~="
        assert spec.release == "1.4"

    def test_case_preserved(self):
        pkg = parse_request("My_Pkg@1.0RC1")
        assert pkg.name == "My_Pkg"
        assert pkg.version.raw == "1.0RC1"
        assert pkg.version.specifier.pre == ("rc", 1)

    def test_surrounding_whitespace_ignored(self):
        assert parse_request("  foo@1.0  ") == parse_request("foo@1.0")

    @pytest.mark.parametrize("text", ["foo@1@2", "@1.0.0", "", "foo@", "fo o", "foo/bar@1.0", "foo.bar"])
    def test_invalid(self, text):
        with pytest.raises(InvalidFormatError):
            parse_request(text)

    @pytest.mark.parametrize("text", ["foo", "foo@1.0.0", "foo-bar_2@0!1.0rc1+local.1", "Foo@nightly"])
    def test_round_trip(self, text):
        assert str(parse_request(text)) == text

    def test_literal_equality_ignores_parsed_form(self):
        assert parse_request("foo@1.0") == PackageIdentity("foo", VersionSpecifier.literal("1.0"))


class TestParseFilename:
    """name-version.ext artifact filenames."""

    def test_simple_sdist(self):
        pkg = parse_filename("foo-1.0.0.tar.gz")
        assert pkg == PackageIdentity("foo", VersionSpecifier.literal("1.0.0"))

    @pytest.mark.parametrize("filename", ["foo-1.0.tgz", "foo-1.0.zip", "foo-1.0.whl", "foo-1.0.TAR.GZ"])
    def test_extensions(self, filename):
        assert parse_filename(filename).name == "foo"

    def test_name_with_dash(self):
        pkg = parse_filename("foo-bar-1.0.0.zip")
        assert pkg.name == "foo-bar"
        assert pkg.version.raw == "1.0.0"

    def test_filename_epoch(self):
        pkg = parse_filename("foo-1_0.6.1.tar.gz")
        assert pkg.version.raw == "1_0.6.1"
        assert pkg.version.specifier.epoch == 1
        assert pkg.version.specifier.release == "0.6.1"

    def test_dev_release_with_v_prefix(self):
        spec = parse_filename("foo-v2022.01.01.dev3.whl").version.specifier
        assert spec.release == "2022.01.01"
        assert spec.dev == 3
        assert spec.is_prerelease

    def test_pre_and_local(self):
        pkg = parse_filename("foo-90.1-rc3+ubuntu.01.tar.gz")
        spec = pkg.version.specifier
        assert pkg.version.raw == "90.1-rc3+ubuntu.01"
        assert spec.pre == ("rc", 3)
        assert spec.local == "ubuntu.01"
        assert spec.public() == "90.1rc3+ubuntu.01"

    def test_keywords_case_insensitive_value_preserved(self):
        pkg = parse_filename("Foo-1.0.0Beta2.POST1.tar.gz")
        assert pkg.name == "Foo"
        assert pkg.version.raw == "1.0.0Beta2.POST1"
        assert pkg.version.specifier.pre == ("b", 2)
        assert pkg.version.specifier.post == 1

    def test_full_path_accepted(self, tmp_path):
        assert parse_filename(tmp_path / "foo-1.0.0.tar.gz").name == "foo"

    @pytest.mark.parametrize(
        "filename",
        ["readme.txt", "foo-1.0.0.exe", "foo.tar.gz", "foo-latest.tar.gz", "-1.0.0.tar.gz", "foo-1.0.0"],
    )
    def test_invalid(self, filename):
        with pytest.raises(InvalidFormatError):
            parse_filename(filename)

    def test_request_and_filename_agree_on_names(self):
        for name in ["foo", "foo-bar", "foo_bar", "Foo9"]:
            assert is_valid_name(name)
            assert parse_filename(f"{name}-1.0.tar.gz").name == parse_request(name).name


class TestParseSpecifier:
    """Standalone version specifiers."""

    def test_epoch_and_operator(self):
        spec = parse_specifier(">=2!1.0a1")
        assert spec.op == ">="
        assert spec.epoch == 2
        assert spec.pre == ("a", 1)

    def test_default_operator(self):
        assert parse_specifier("1.0").op == "=="

    def test_invalid(self):
        with pytest.raises(InvalidFormatError):
            parse_specifier("=>1.0")


class TestReadPackagesFromFile:
    """One request per line."""

    def test_reads_requests_skipping_blanks_and_comments(self, tmp_path):
        path = tmp_path / "packages.txt"
        path.write_text("# header\nfoo\n\nbar@1.0.0  # pinned\n", encoding="utf-8")
        assert [str(p) for p in read_packages_from_file(path)] == ["foo", "bar@1.0.0"]

    def test_bad_line_reports_location(self, tmp_path):
        path = tmp_path / "packages.txt"
        path.write_text("foo\nbar\nbad@1@2\n", encoding="utf-8")
        with pytest.raises(InvalidFormatError, match=":3:"):
            read_packages_from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            read_packages_from_file(tmp_path / "missing.txt")
