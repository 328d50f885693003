"""Constants and configuration for the pound editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    VERSION = "1.0.0"

    # Rendering
    TAB_STOP = 8  # Tabs expand to the next multiple of this column
    EMPTY_ROW_MARKER = "~"
    WELCOME_MESSAGE = "Pound Editor --- Version {}"
    NO_NAME = "[No Name]"
    NO_FILE_TYPE = "no ft"
    STATUS_BAR_ROWS = 2  # Status bar + message bar

    # Keyboard timing
    KEY_POLL_TIMEOUT = 0.5  # Seconds to wait for a key before re-polling

    # Quit confirmation
    QUIT_TIMES = 3  # Consecutive Ctrl-Q presses needed to discard changes

    # Status messages
    MESSAGE_TIMEOUT = 5.0  # Seconds a status message stays visible
    HELP_MESSAGE = "HELP: Ctrl-S = Save | Ctrl-Q = Quit | Ctrl-F = Find"
    QUIT_WARNING = "WARNING!!! File has unsaved changes. Press Ctrl-Q {} more times to quit."
    SAVE_PROMPT = "Save as : {}"
    SEARCH_PROMPT = "Search: {} (Use ESC / Arrows / Enter)"
    SAVE_ABORTED = "Save Aborted"
    SAVE_SUCCESS = "{} bytes written to disk"
    SAVE_FAILED = "Can't save! I/O error: {}"
