"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["register", "login", "logout", "upload", "list", "download", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#3FA9F5 bold",
        "command": "#0088ff bold",
    }
)

BLUE = "\033[38;2;63;169;245m"
GREEN = "\033[32m"
RESET = "\033[0m"

LOGO = f"""{BLUE}
 _   _ _ __  ____| | ___   __ _  __| |
| | | | '_ \\|_  /| |/ _ \\ / _` |/ _` |
| |_| | |_) |/ / | | (_) | (_| | (_| |
 \\__,_| .__//___||_|\\___/ \\__,_|\\__,_|
      |_|
{RESET}"""

WELCOME_TITLE = "upzload CLI - upload files and share them by link"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "upzload> "

HELP_TEXT = """Available commands:
  register <username> <password>                         Register and log in
  login <username> <password>                            Log in and store the session token
  logout                                                 End the current session
  upload <file> [<file> ...]                             Upload files into a new share folder
  list                                                   Show your namespace as a tree
  download <owner> <folder_id> <filename> [output_path]  Download a file from a share folder
  clear                                                  Clear screen and redisplay welcome message
  help                                                   Show this help
  exit                                                   Exit REPL

Examples:
  register alice pw123
  upload a.txt b.txt
  list
  download alice 3fa9c1 a.txt
  download alice 3fa9c1 a.txt ./copies/a.txt"""
