#!/usr/bin/env python3
"""
gitlane - interactive commit graph for a git repository
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import pygit2
from PySide6.QtWidgets import QApplication, QMessageBox

from gitlane.config.settings import Settings
from gitlane.git_backend.errors import BackendUnavailable
from gitlane.git_backend.repository import find_marker, initialize_repository
from gitlane.ui.graph_panel import GraphPanel, open_panel

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="gitlane",
        description="gitlane - interactive commit graph",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=os.getcwd(),
        help="Repository (or a directory inside it) to show; defaults to the current directory",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: ~/.config/gitlane/settings.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    return parser.parse_args(argv)


def setup_logging(settings: Settings, verbose: bool = False) -> None:
    level = "DEBUG" if verbose else settings.get_log_level()
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def offer_initialization(path: str, settings: Settings) -> bool:
    """
    Ask whether to initialize a repository at path and do it.

    Not offered when the marker file shows tracking was already set up for
    this directory or the working tree it belongs to. Returns True if a
    repository now exists.
    """
    tracked_root = find_marker(path, settings.get_marker_file())
    if tracked_root is not None:
        error_msg = QMessageBox()
        error_msg.setIcon(QMessageBox.Icon.Critical)
        error_msg.setWindowTitle("Repository Missing")
        error_msg.setText("This directory was tracked before, but no git repository was found.")
        error_msg.setInformativeText(str(tracked_root))
        error_msg.exec()
        return False

    msg = QMessageBox()
    msg.setIcon(QMessageBox.Icon.Question)
    msg.setWindowTitle("Git Repository Required")
    msg.setText("gitlane needs a git repository to show a commit graph.")
    msg.setInformativeText(
        "Would you like to initialize a git repository and create an initial commit?"
    )
    msg.setStandardButtons(QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No)
    msg.setDefaultButton(QMessageBox.StandardButton.Yes)

    if msg.exec() != QMessageBox.StandardButton.Yes:
        return False

    try:
        initialize_repository(path)
    except pygit2.GitError as git_error:
        logger.error("Initializing %s failed: %s", path, git_error)
        error_msg = QMessageBox()
        error_msg.setIcon(QMessageBox.Icon.Critical)
        error_msg.setWindowTitle("Git Initialization Failed")
        error_msg.setText("Failed to initialize git repository.")
        error_msg.setInformativeText(str(git_error))
        error_msg.exec()
        return False

    return True


def main() -> None:
    args = parse_args()
    settings = Settings(args.config)
    setup_logging(settings, args.verbose)

    app = QApplication(sys.argv)
    app.setApplicationName("gitlane")
    app.setOrganizationName("gitlane")

    path = str(Path(args.path).resolve())
    panel: GraphPanel | None = None
    try:
        panel = open_panel(path, settings)
    except BackendUnavailable:
        logger.info("%s is not a git repository", path)
        if offer_initialization(path, settings):
            # Retry opening the panel
            panel = open_panel(path, settings)

    if panel is None:
        sys.exit(1)

    panel.resize(1200, 800)
    panel.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
