"""Commit details pane - shows metadata of the selected commit."""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFormLayout, QLabel, QVBoxLayout, QWidget

from gitlane.graph.types import Commit


class CommitDetailsWidget(QWidget):
    """Read-only view of one commit's hash, message, author and date."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.commit: Commit | None = None

        self.setStyleSheet("background-color: #f0f0f0; color: black;")
        self.setMinimumWidth(260)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)

        title = QLabel("Commit Details")
        title.setStyleSheet("font-size: 16px; font-weight: bold;")
        layout.addWidget(title)

        form = QFormLayout()
        self.hash_label = self._value_label()
        self.message_label = self._value_label()
        self.author_name_label = self._value_label()
        self.author_email_label = self._value_label()
        self.date_label = self._value_label()
        form.addRow("<b>Hash:</b>", self.hash_label)
        form.addRow("<b>Message:</b>", self.message_label)
        form.addRow("<b>Author Name:</b>", self.author_name_label)
        form.addRow("<b>Author Email:</b>", self.author_email_label)
        form.addRow("<b>Date:</b>", self.date_label)
        layout.addLayout(form)
        layout.addStretch()

    def _value_label(self) -> QLabel:
        label = QLabel()
        label.setWordWrap(True)
        label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        return label

    def show_commit(self, commit: Commit) -> None:
        """Replace the displayed commit"""
        self.commit = commit
        self.hash_label.setText(commit.hash)
        self.message_label.setText(commit.full_message or commit.message)
        self.author_name_label.setText(commit.author_name)
        self.author_email_label.setText(commit.author_email)
        self.date_label.setText(commit.date)
