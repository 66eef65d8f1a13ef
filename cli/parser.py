"""Command parser for CLI input."""

import shlex

from cli.models import (
    CommandRequest,
    DownloadCommand,
    ListCommand,
    LoginCommand,
    LogoutCommand,
    RegisterCommand,
    UploadCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a command object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        One of the command dataclasses from cli.models

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name, args = tokens[0], tokens[1:]

    if command_name == "register":
        return _parse_credentials(args, RegisterCommand, "register")
    elif command_name == "login":
        return _parse_credentials(args, LoginCommand, "login")
    elif command_name == "logout":
        _expect_no_args(args, "logout")
        return LogoutCommand()
    elif command_name == "upload":
        return _parse_upload(args)
    elif command_name == "list":
        _expect_no_args(args, "list")
        return ListCommand()
    elif command_name == "download":
        return _parse_download(args)
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _expect_no_args(args: list[str], name: str) -> None:
    if args:
        raise ParseError(f"{name} takes no arguments")


def _parse_credentials(args: list[str], command_cls, name: str):
    """Parse '<command> <username> <password>'."""
    if len(args) != 2:
        raise ParseError(f"{name} requires exactly 2 arguments: <username> <password>")

    username, password = args
    return command_cls(username=username, password=password)


def _parse_upload(args: list[str]) -> UploadCommand:
    """Parse 'upload <file> [<file> ...]' command."""
    if not args:
        raise ParseError("upload requires at least one file")

    return UploadCommand(file_list=tuple(args))


def _parse_download(args: list[str]) -> DownloadCommand:
    """Parse 'download <owner> <folder_id> <filename> [output_path]' command."""
    if len(args) not in (3, 4):
        raise ParseError("download requires 3 or 4 arguments: <owner> <folder_id> <filename> [output_path]")

    owner, folder_id, filename = args[:3]
    output_path = args[3] if len(args) == 4 else None

    return DownloadCommand(owner=owner, folder_id=folder_id, filename=filename, output_path=output_path)
