"""Constants and configuration for the minivim editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    PROGRAM_NAME = "minivim"

    # Editing
    TAB_WIDTH = 4  # Tab inserts this many spaces

    # Screen layout
    RESERVED_ROWS = 2  # Message/prompt row + status row below the text

    # Keyboard timing
    VIM_SEQUENCE_TIMEOUT = 1.0  # Window for the second key of gg/GG/dd/yy (seconds)

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    INTERRUPT_PIPE_MARKER = b'C'  # Byte written to pipe when SIGINT arrives

    # Theme defaults (blessed color names)
    DEFAULT_FOREGROUND = "white"
    DEFAULT_BACKGROUND = "black"

    # Status messages
    WELCOME_MESSAGE = "{} editor -- version {}"
    STATUS_LINE = "Mode: {} | Filename: {} | Status: {} | Line: {} / {}"
    CONFIRM_EXIT_MESSAGE = "Leave without saving: Ctrl-Y = exit | Ctrl-N = save"
    SAVE_AS_PROMPT = "Filename: "
    JUMP_PROMPT = "Jump to: "
    SEARCH_PROMPT = "Search: "
