"""
CLI Constants

Command names, help strings and defaults for the Typer application.
"""


class CLIDefaults:
    """CLI defaults."""

    VERSION = "0.1.0"
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    SHARE_PAGE_URL = "https://ethos-compare.app/"


class CLICommands:
    """CLI command names."""

    PROFILE = "profile"
    SEARCH = "search"
    COMPARE = "compare"


class CLIHelp:
    """CLI help texts."""

    APP_NAME = "ethoscompare"
    APP_DESCRIPTION = "Compare Ethos reputation profiles side by side."
    APP_STYLE = "rich"
    VERSION_TEXT = "ethoscompare v{version}"

    PROFILE_HANDLE_HELP = "Handle (username) of the profile to resolve"
    SEARCH_QUERY_HELP = "Search text (at least three characters)"
    COMPARE_LEFT_HELP = "Handle shown on the left side"
    COMPARE_RIGHT_HELP = "Handle shown on the right side"
    PAGE_URL_HELP = "Comparison page URL used in the share link"


class ShareConfig:
    """Share link and export naming."""

    INTENT_URL = "https://twitter.com/intent/tweet"
    LEFT_PARAM = "user1"
    RIGHT_PARAM = "user2"
    EXPORT_PREFIX = "ethos-comparison"
    EXPORT_EXTENSION = ".png"
