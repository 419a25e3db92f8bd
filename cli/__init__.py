"""
cli - Command Line Interface for File Renamer
"""

from .cli_entry import main
from .cli_interactive import interactive_mode
from .op_parser import parse_operation, OperationSyntaxError

__all__ = ["main", "interactive_mode", "parse_operation", "OperationSyntaxError"]
