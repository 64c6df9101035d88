"""Global logging and error handling utilities"""
import sys
import logging
import traceback
from PyQt5.QtWidgets import QMessageBox

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

_main_window = None

def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window

def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Handle exceptions with optional popup in release mode

    Args:
        e: The exception to handle
        user_message: User-friendly message to show in popup (optional)
        title: Title for the popup dialog

    In DEBUG_MODE:
        - Just raises the exception (shows full traceback)

    In RELEASE_MODE:
        - Shows popup with user message or exception string
        - Logs the full traceback
        - Then raises the exception
    """
    if DEBUG_MODE:
        # Dev mode: just raise to see full traceback
        raise e
    else:
        # Release mode: show popup, log, then raise

        # Log the full traceback
        tb = traceback.format_exc()
        logging.getLogger('Editor').error(tb)

        # Show user-friendly popup
        message = user_message if user_message else str(e)
        if _main_window:
            QMessageBox.critical(_main_window, title, message)
        else:
            # Fallback if no main window set
            logging.getLogger('Editor').error(f"ERROR POPUP (no window): {title} - {message}")

        # Re-raise so application can handle it appropriately
        raise e

def loggerRecover(e: Exception, context: str, logger: logging.Logger = None):
    """Log a recoverable error and let the caller continue with a safe value

    Used for the viewport's non-fatal error kinds (bad input text, empty
    touch gestures, unavailable transform store). Never raises and never
    shows a popup: the component stays interactive.

    Args:
        e: The exception that was caught
        context: Short description of what was being attempted
        logger: Logger to report to (defaults to the 'Viewport' logger)
    """
    logger = logger or logging.getLogger('Viewport')
    logger.warning(f"{context}: {e}")
    if DEBUG_MODE:
        logger.debug(traceback.format_exc())
