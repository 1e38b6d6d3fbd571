# main.py
import logging
import sys
from PySide6.QtWidgets import QApplication

from src import config
from src.api.client import ApiClient
from src.ui.auth.identity import Identity
from src.ui.main_window import MainWindow


def main():
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)

    # 1) Session (env sign-in is optional; the window has a Sign in button)
    identity = Identity()
    if config.API_TOKEN and config.USER_ID:
        identity.sign_in(config.API_TOKEN, config.USER_ID)

    # 2) Authenticated client reads the token on every request
    client = ApiClient(token_getter=lambda: identity.token)

    # 3) Launch app
    w = MainWindow(identity, client)
    w.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
