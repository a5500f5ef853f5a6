"""Core modules for actionflow."""

from actionflow.core.logging import (
    configure_logging,
    FlowLoggingConfig,
    LogLevel,
    LogComponent,
)

__all__ = [
    'configure_logging',
    'FlowLoggingConfig',
    'LogLevel',
    'LogComponent'
]
