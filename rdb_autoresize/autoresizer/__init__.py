"""Autoresize service - grows a database volume before it fills up."""

from .config import AutoResizeConfig, load_config
from .decision import Action, CycleReport, CycleState, ResizeDecisionEngine
from .scheduler import Scheduler
from .service import AutoResizeService


def main():
    """Entry point for autoresize service."""
    from .cli import main as cli_main

    raise SystemExit(cli_main())


__all__ = [
    "AutoResizeConfig",
    "AutoResizeService",
    "Action",
    "CycleReport",
    "CycleState",
    "ResizeDecisionEngine",
    "Scheduler",
    "load_config",
    "main",
]
