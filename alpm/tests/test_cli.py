"""Tests for CLI argument parsing and commands"""

import json

import pytest

from alpm.cli.main import create_parser, main
from alpm.core import config


SAMPLE_PKGINFO = """\
pkgname = example
pkgbase = example
pkgver = 1.0.0-1
pkgdesc = An example
url = https://example.org/
builddate = 1729181726
packager = John Doe <john@example.org>
size = 1024
arch = aarch64
depend = glibc
"""


@pytest.fixture(autouse=True)
def host_x86_64(monkeypatch, tmp_path):
    monkeypatch.setenv(config.ENV_CARCH, 'x86_64')
    monkeypatch.setenv(config.ENV_MAKEPKG_CONF, str(tmp_path / 'makepkg.conf'))
    config.reset_cache()
    yield
    config.reset_cache()


@pytest.fixture
def pkginfo_file(tmp_path):
    path = tmp_path / '.PKGINFO'
    path.write_text(SAMPLE_PKGINFO)
    return path


class TestParser:
    """Tests for create_parser."""

    def test_vercmp(self):
        args = create_parser().parse_args(['vercmp', '1.0', '2.0'])
        assert args.command == 'vercmp'
        assert args.version1 == '1.0'
        assert args.version2 == '2.0'

    def test_pkginfo_options(self):
        args = create_parser().parse_args(['pkginfo', '--json', '--check-arch', 'x.pkg.tar.zst'])
        assert args.json
        assert args.check_arch
        assert args.path == 'x.pkg.tar.zst'

    def test_validate_kind_choices(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(['validate', 'colour', 'foo'])

    def test_no_command(self, capsys):
        assert main([]) == 1


class TestVercmp:
    """Tests for the vercmp command."""

    @pytest.mark.parametrize('one, two, expected', [
        ('1.0', '2.0', '-1'),
        ('1:1.0', '2.0', '1'),
        ('1.0', '1.00', '0'),
        ('1.0~rc1', '1.0', '-1'),
    ])
    def test_prints_ordering(self, capsys, one, two, expected):
        assert main(['--nocolor', 'vercmp', one, two]) == 0
        assert capsys.readouterr().out.strip() == expected

    def test_invalid_version(self, capsys):
        assert main(['--nocolor', 'vercmp', '1.0-', '2.0']) == 1
        captured = capsys.readouterr()
        assert 'Invalid version' in captured.err
        assert captured.out == ''


class TestSatisfies:
    """Tests for the satisfies command."""

    def test_satisfied(self, capsys):
        assert main(['--nocolor', 'satisfies', 'pacman>=6:6.0.1-2', 'pacman', '6:6.0.2-1']) == 0
        assert 'satisfies' in capsys.readouterr().out

    def test_not_satisfied(self):
        assert main(['--quiet', 'satisfies', 'pacman>=6:6.0.1-2', 'pacman', '6:6.0.1-1']) == 1

    def test_parse_error(self, capsys):
        assert main(['--nocolor', 'satisfies', 'pacman>=', 'pacman', '1.0']) == 2
        captured = capsys.readouterr()
        assert 'missing version' in captured.err
        assert captured.out == ''


class TestValidate:
    """Tests for the validate command."""

    def test_all_valid(self, capsys):
        assert main(['--nocolor', 'validate', 'version', '1.0-1', '1:2.0']) == 0
        out = capsys.readouterr().out
        assert 'ok 1.0-1' in out
        assert 'ok 1:2.0' in out

    def test_reports_kind_and_offset(self, capsys):
        assert main(['--nocolor', 'validate', 'name', 'foo', 'foo bar']) == 1
        out = capsys.readouterr().out
        assert 'ok foo' in out
        assert 'invalid foo bar: invalid character at offset 3' in out

    def test_unknown_architecture(self, capsys):
        assert main(['--nocolor', 'validate', 'arch', 'loong64']) == 0
        assert 'unknown architecture' in capsys.readouterr().out


class TestMetadataCommands:
    """Tests for the pkginfo, buildinfo and config commands."""

    def test_pkginfo_text(self, capsys, pkginfo_file):
        assert main(['--nocolor', 'pkginfo', str(pkginfo_file)]) == 0
        assert capsys.readouterr().out == SAMPLE_PKGINFO

    def test_pkginfo_json(self, capsys, pkginfo_file):
        assert main(['--nocolor', 'pkginfo', '--json', str(pkginfo_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['pkgname'] == 'example'
        assert data['depend'] == ['glibc']

    def test_pkginfo_check_arch(self, capsys, pkginfo_file):
        assert main(['--nocolor', 'pkginfo', '--check-arch', str(pkginfo_file)]) == 1
        assert 'built for aarch64' in capsys.readouterr().out

    def test_pkginfo_invalid(self, capsys, tmp_path):
        path = tmp_path / '.PKGINFO'
        path.write_text(SAMPLE_PKGINFO.replace('pkgver = 1.0.0-1', 'pkgver = 1.0.0'))
        assert main(['--nocolor', 'pkginfo', str(path)]) == 1
        assert 'line 3' in capsys.readouterr().err

    def test_missing_file(self, capsys, tmp_path):
        assert main(['--nocolor', 'buildinfo', str(tmp_path / '.BUILDINFO')]) == 1
        assert 'Error' in capsys.readouterr().err

    def test_config(self, capsys):
        assert main(['--nocolor', 'config']) == 0
        out = capsys.readouterr().out
        assert 'Architecture: x86_64' in out
        assert '(not set)' in out
