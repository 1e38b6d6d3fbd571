# src/ui/main_window.py
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton
)

from src.api.client import ApiClient
from src.ui.auth.identity import Identity
from src.ui.auth_dialogs import SignInDialog
from src.ui.pages.resources import ResourcesPage
from src.ui.tasks import TaskRunner
from src.ui.widgets.toast import Notifier


class MainWindow(QMainWindow):
    def __init__(self, identity: Identity, client: ApiClient):
        super().__init__()
        self.resize(1100, 650)
        self.identity = identity
        self.client = client

        root = QWidget()
        layout = QVBoxLayout(root)

        # Top bar
        top = QHBoxLayout()
        self.user_label = QLabel("")
        self.user_label.setStyleSheet("color:#9a9a9a;")
        self.sign_in_btn = QPushButton("Sign in")
        self.sign_out_btn = QPushButton("Sign out")
        top.addStretch()
        top.addWidget(self.user_label)
        top.addWidget(self.sign_in_btn)
        top.addWidget(self.sign_out_btn)
        layout.addLayout(top)

        # toasts are drawn over the window
        self.notifier = Notifier(self, parent=self)
        self.runner = TaskRunner(self)

        self.resources_page = ResourcesPage(identity, client, notifier=self.notifier, runner=self.runner)
        layout.addWidget(self.resources_page, 1)
        self.setCentralWidget(root)

        self.sign_in_btn.clicked.connect(self.sign_in)
        self.sign_out_btn.clicked.connect(self.identity.sign_out)
        self.identity.signed_in_changed.connect(self.apply_session)

        self._update_session_ui()

    def sign_in(self):
        dlg = SignInDialog(self)
        if dlg.exec() != SignInDialog.Accepted:
            return
        self.identity.sign_in(dlg.data["token"], dlg.data["user_id"])

    def apply_session(self, _signed_in=None):
        self._update_session_ui()
        self.resources_page.load_data()

    def _update_session_ui(self):
        signed_in = self.identity.is_signed_in()
        user_id = self.identity.current_user_id if signed_in else ""

        self.setWindowTitle(f"Resource Desk — {user_id}" if user_id else "Resource Desk")
        self.user_label.setText(f"Signed in as {user_id}" if signed_in else "Not signed in")
        self.sign_in_btn.setVisible(not signed_in)
        self.sign_out_btn.setVisible(signed_in)
