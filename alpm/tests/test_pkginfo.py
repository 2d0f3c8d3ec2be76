"""Tests for PKGINFO parser"""

import logging

import pytest

from alpm.core.errors import MetadataError
from alpm.core.fields import PackageType, SchemaVersion
from alpm.core.name import Name
from alpm.core.pkginfo import parse_pkginfo, read_pkginfo_file
from alpm.core.relation import PackageRelation
from alpm.core.version import Version


SAMPLE_PKGINFO_V1 = """\
# Generated by makepkg 6.0.2
# using fakeroot version 1.30.1
pkgname = example
pkgbase = example
pkgver = 1:1.0.0-1
pkgdesc = A project that does something
url = https://example.org/
builddate = 1729181726
packager = John Doe <john@example.org>
size = 181849963
arch = any
license = GPL-3.0-or-later
license = LGPL-3.0-or-later
replaces = other-package>0.9.0-3
group = package-group
conflict = conflicting-package<1.0.0
provides = some-component
provides = libexample.so=1-64
backup = etc/example/config.toml
depend = glibc
depend = gcc-libs>=13
optdepend = python: for special-python-script.py
makedepend = cmake
checkdepend = extra-test-tool
"""

SAMPLE_PKGINFO_V2 = SAMPLE_PKGINFO_V1 + "xdata = pkgtype=pkg\n"


class TestParsePkginfo:
    """Tests for parse_pkginfo."""

    def test_v1(self):
        info = parse_pkginfo(SAMPLE_PKGINFO_V1)
        assert info.schema is SchemaVersion.V1
        assert info.pkgname == Name("example")
        assert info.pkgver == Version.parse("1:1.0.0-1")
        assert info.pkgdesc == "A project that does something"
        assert info.builddate == 1729181726
        assert info.packager.name == "John Doe"
        assert info.packager.email == "john@example.org"
        assert info.size == 181849963
        assert str(info.arch) == "any"
        assert info.license == ["GPL-3.0-or-later", "LGPL-3.0-or-later"]
        assert info.depend == [PackageRelation.parse("glibc"), PackageRelation.parse("gcc-libs>=13")]
        assert info.provides[1].requirement.version == Version.parse("1-64")
        assert info.optdepend[0].description == "for special-python-script.py"
        assert info.backup == ["etc/example/config.toml"]
        assert info.pkgtype is None
        assert info.extra == {}

    def test_v2(self):
        info = parse_pkginfo(SAMPLE_PKGINFO_V2)
        assert info.schema is SchemaVersion.V2
        assert info.xdata == {"pkgtype": "pkg"}
        assert info.pkgtype is PackageType.PACKAGE

    def test_forced_v2_requires_pkgtype(self):
        with pytest.raises(MetadataError, match="pkgtype"):
            parse_pkginfo(SAMPLE_PKGINFO_V1, schema=SchemaVersion.V2)

    def test_invalid_pkgtype(self):
        with pytest.raises(MetadataError, match="pkgtype") as exc:
            parse_pkginfo(SAMPLE_PKGINFO_V1 + "xdata = pkgtype=bogus\n")
        assert exc.value.line == 25

    def test_text_round_trip(self):
        info = parse_pkginfo(SAMPLE_PKGINFO_V2)
        again = parse_pkginfo(info.to_text())
        assert again == info

    def test_to_dict(self):
        data = parse_pkginfo(SAMPLE_PKGINFO_V2).to_dict()
        assert data["pkgver"] == "1:1.0.0-1"
        assert data["depend"] == ["glibc", "gcc-libs>=13"]
        assert data["xdata"] == {"pkgtype": "pkg"}

    def test_missing_required_key(self):
        content = SAMPLE_PKGINFO_V1.replace("pkgbase = example\n", "")
        with pytest.raises(MetadataError, match="pkgbase"):
            parse_pkginfo(content)

    def test_repeated_single_key(self):
        content = SAMPLE_PKGINFO_V1 + "pkgname = other\n"
        with pytest.raises(MetadataError) as exc:
            parse_pkginfo(content)
        assert exc.value.line == 25

    def test_pkgver_requires_pkgrel(self):
        content = SAMPLE_PKGINFO_V1.replace("pkgver = 1:1.0.0-1", "pkgver = 1:1.0.0")
        with pytest.raises(MetadataError) as exc:
            parse_pkginfo(content)
        assert exc.value.line == 5

    def test_malformed_relation(self):
        content = SAMPLE_PKGINFO_V1.replace("depend = glibc\n", "depend = glibc>=\n")
        with pytest.raises(MetadataError) as exc:
            parse_pkginfo(content)
        assert exc.value.line == 20

    def test_malformed_line(self):
        with pytest.raises(MetadataError) as exc:
            parse_pkginfo(SAMPLE_PKGINFO_V1 + "garbage\n")
        assert exc.value.line == 25

    def test_absolute_backup_rejected(self):
        content = SAMPLE_PKGINFO_V1.replace("backup = etc/", "backup = /etc/")
        with pytest.raises(MetadataError, match="backup"):
            parse_pkginfo(content)

    def test_unknown_key_is_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="alpm.core.metadata"):
            info = parse_pkginfo(SAMPLE_PKGINFO_V1 + "futurekey = value\n")
        assert info.extra == {"futurekey": ["value"]}
        assert "futurekey" in caplog.text

    def test_unknown_architecture_is_warning(self, caplog):
        content = SAMPLE_PKGINFO_V1.replace("arch = any", "arch = loong64")
        with caplog.at_level(logging.WARNING, logger="alpm.core.pkginfo"):
            info = parse_pkginfo(content)
        assert not info.arch.is_known
        assert "loong64" in caplog.text

    def test_read_file(self, tmp_path):
        path = tmp_path / ".PKGINFO"
        path.write_text(SAMPLE_PKGINFO_V1)
        assert read_pkginfo_file(path).pkgname == Name("example")

    def test_read_file_rejects_invalid_utf8(self, tmp_path):
        path = tmp_path / ".PKGINFO"
        path.write_bytes(SAMPLE_PKGINFO_V1.replace("A project", "Caf\xe9").encode("latin-1"))
        with pytest.raises(MetadataError, match="UTF-8"):
            read_pkginfo_file(path)
