"""Dismissible notification bar."""

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QSizePolicy, QWidget


class NotificationBar(QFrame):
    """Shows one message until the user closes it."""

    dismissed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setStyleSheet("""
            NotificationBar {
                background-color: #FFEBEE;
                border: 1px solid #F44336;
                border-radius: 5px;
            }
        """)
        self.setFrameShape(QFrame.Shape.StyledPanel)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)

        self.message_label = QLabel()
        self.message_label.setWordWrap(True)
        self.message_label.setSizePolicy(
            QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred
        )
        layout.addWidget(self.message_label)

        self.close_button = QPushButton("Close")
        self.close_button.clicked.connect(self.dismiss)
        layout.addWidget(self.close_button, alignment=Qt.AlignmentFlag.AlignRight)

        self.hide()

    def show_message(self, message: str) -> None:
        self.message_label.setText(message)
        self.show()

    def dismiss(self) -> None:
        """Hide the bar and tell listeners the message was acknowledged"""
        if self.isHidden():
            return
        self.hide()
        self.dismissed.emit()
