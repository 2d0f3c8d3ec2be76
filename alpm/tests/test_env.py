"""Tests for makepkg options and installed packages"""

import pytest

from alpm.core.env import BuildEnvironmentOption, InstalledPackage, MakepkgOption, PackageOption
from alpm.core.errors import InstalledPackageError, OptionError, VersionError
from alpm.core.name import Name
from alpm.core.system import Architecture
from alpm.core.version import Version


class TestMakepkgOption:
    """Tests for MakepkgOption.parse."""

    @pytest.mark.parametrize("text, name, on", [
        ("something", "something", True),
        ("1cool.build-option", "1cool.build-option", True),
        ("üñıçøĐë", "üñıçøĐë", True),
        ("!üñıçøĐë", "üñıçøĐë", False),
        ("!something", "something", False),
    ])
    def test_parse(self, text, name, on):
        option = MakepkgOption.parse(text)
        assert option.name == name
        assert option.on is on
        assert str(option) == text

    @pytest.mark.parametrize("text, char", [
        ("!!something", "!"),
        ("foo\\", "\\"),
        ("foo bar", " "),
    ])
    def test_invalid_character(self, text, char):
        with pytest.raises(OptionError) as exc:
            MakepkgOption.parse(text)
        assert exc.value.invalid_char == char

    def test_aliases(self):
        assert BuildEnvironmentOption.parse("!ccache") == PackageOption.parse("!ccache")


class TestInstalledPackage:
    """Tests for InstalledPackage.parse."""

    def test_parse(self):
        package = InstalledPackage.parse("foo-bar-1:1.0.0-1-any")
        assert package.name == Name("foo-bar")
        assert package.version == Version.parse("1:1.0.0-1")
        assert package.architecture == Architecture("any")
        assert str(package) == "foo-bar-1:1.0.0-1-any"

    def test_missing_name(self):
        with pytest.raises(InstalledPackageError) as exc:
            InstalledPackage.parse("1:1.0.0-1-any")
        assert exc.value.component == "name"

    @pytest.mark.parametrize("text, component", [
        ("foo", "pkgrel"),
        ("foo-1", "epoch_pkgver"),
        ("-1.0-1-any", "name"),
    ])
    def test_missing_components(self, text, component):
        with pytest.raises(InstalledPackageError) as exc:
            InstalledPackage.parse(text)
        assert exc.value.component == component

    @pytest.mark.parametrize("text", ["foo-bar-1:1.0.0-1", "foo-bar-1:1.0.0-any"])
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            InstalledPackage.parse(text)

    def test_pkgrel_is_required(self):
        with pytest.raises(VersionError):
            InstalledPackage.parse("foo-1.0-x-any")
