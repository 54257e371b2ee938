# Utility modules for the bakery back-office
from .sanitizer import sanitize_text, sanitize_name
from .log import setup_logging, stderr_console
