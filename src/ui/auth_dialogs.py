# src/ui/auth_dialogs.py
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QPushButton,
    QLabel, QHBoxLayout, QMessageBox
)


class SignInDialog(QDialog):
    """
    Collects the session token issued by the identity provider.
    The dialog only validates input; Identity.sign_in() does the rest.
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Sign in")
        self.setMinimumWidth(420)

        lay = QVBoxLayout(self)

        title = QLabel("Sign in")
        title.setStyleSheet("font-size:18px;font-weight:800;")
        lay.addWidget(title)

        hint = QLabel("Paste the access token from your account page.")
        hint.setStyleSheet("color:#9a9a9a;")
        hint.setWordWrap(True)
        lay.addWidget(hint)

        form = QFormLayout()
        self.user_id = QLineEdit()
        self.user_id.setPlaceholderText("e.g. user_2abc...")
        self.token = QLineEdit()
        self.token.setEchoMode(QLineEdit.Password)

        form.addRow("User ID", self.user_id)
        form.addRow("Access token", self.token)
        lay.addLayout(form)

        btns = QHBoxLayout()
        btns.addStretch()
        self.cancel_btn = QPushButton("Cancel")
        self.login_btn = QPushButton("Sign in")
        btns.addWidget(self.cancel_btn)
        btns.addWidget(self.login_btn)
        lay.addLayout(btns)

        self.cancel_btn.clicked.connect(self.reject)
        self.login_btn.clicked.connect(self.on_login)

        self._data = None

    @property
    def data(self):
        return self._data

    def on_login(self):
        u = (self.user_id.text() or "").strip()
        t = (self.token.text() or "").strip()

        if not u or not t:
            QMessageBox.warning(self, "Missing", "Enter user id and access token.")
            return

        self._data = {"user_id": u, "token": t}
        self.accept()
