"""REPL with prompt_toolkit for user interaction."""

import os
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.commands import (
    handle_download,
    handle_list,
    handle_login,
    handle_logout,
    handle_register,
    handle_upload,
)
from cli.completer import UpzloadCompleter
from cli.constants import (
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.models import (
    DownloadCommand,
    ListCommand,
    LoginCommand,
    LogoutCommand,
    RegisterCommand,
    UploadCommand,
)
from cli.parser import ParseError, parse_command

HANDLERS = {
    RegisterCommand: handle_register,
    LoginCommand: handle_login,
    LogoutCommand: handle_logout,
    UploadCommand: handle_upload,
    ListCommand: handle_list,
    DownloadCommand: handle_download,
}


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(LOGO)
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def dispatch_command(cmd_obj) -> str:
    """Dispatch parsed command to appropriate handler."""
    handler = HANDLERS.get(type(cmd_obj))
    if handler is None:
        return f"Unknown command type: {type(cmd_obj)}"
    return handler(cmd_obj)


def repl_loop() -> None:
    """Start interactive REPL with prompt_toolkit."""
    completer = UpzloadCompleter()
    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=completer, history=history, style=STYLE
    )

    clear_screen()
    show_welcome()

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)]).strip()

            if not user_input:
                continue

            if user_input == "exit":
                print("Goodbye!")
                break

            if user_input == "help":
                print(HELP_TEXT)
                continue

            if user_input == "clear":
                clear_screen()
                show_welcome()
                continue

            print(dispatch_command(parse_command(user_input)))

        except ParseError as e:
            print(f"Error: {e}")
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
