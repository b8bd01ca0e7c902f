"""
Presentation Layer for Skrins

Typer application plus the rich formatters and option validators it uses.

Usage:
    from skrins.cli import app
    app()
"""

from skrins.cli.cli import app
from skrins.cli.formatters import (
    console,
    format_cli_response,
    print_capture_result,
    print_config,
    print_error,
    print_info,
    print_json,
    print_pass_report,
    print_warning,
)
from skrins.cli.validators import (
    validate_capture_dir,
    validate_log_level,
    validate_private_key,
    validate_remote_host,
)

__all__ = [
    'app',
    'console',
    'format_cli_response',
    'print_capture_result',
    'print_config',
    'print_error',
    'print_info',
    'print_json',
    'print_pass_report',
    'print_warning',
    'validate_capture_dir',
    'validate_log_level',
    'validate_private_key',
    'validate_remote_host',
]
