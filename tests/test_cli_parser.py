"""Tests for CLI command parsing."""

import pytest

from cli.models import (
    DownloadCommand,
    ListCommand,
    LoginCommand,
    LogoutCommand,
    RegisterCommand,
    UploadCommand,
)
from cli.parser import ParseError, parse_command


def test_parse_register():
    assert parse_command('register alice pw123') == RegisterCommand(username='alice', password='pw123')


def test_parse_login_with_quotes():
    assert parse_command('login alice "pass word"') == LoginCommand(username='alice', password='pass word')


def test_parse_logout_and_list():
    assert parse_command('logout') == LogoutCommand()
    assert parse_command('list') == ListCommand()


def test_parse_upload():
    cmd = parse_command('upload a.txt "my file.pdf"')
    assert cmd == UploadCommand(file_list=('a.txt', 'my file.pdf'))


def test_parse_download():
    cmd = parse_command('download alice abc123 a.txt')
    assert cmd == DownloadCommand(owner='alice', folder_id='abc123', filename='a.txt')


def test_parse_download_with_output():
    cmd = parse_command('download alice abc123 a.txt out/a.txt')
    assert cmd.output_path == 'out/a.txt'


@pytest.mark.parametrize("line", [
    '',
    '   ',
    'register alice',
    'login',
    'upload',
    'list extra',
    'logout now',
    'download alice abc123',
    'frobnicate',
    'upload "unterminated',
])
def test_parse_errors(line):
    with pytest.raises(ParseError):
        parse_command(line)
