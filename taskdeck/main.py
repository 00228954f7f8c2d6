from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication, QStyleFactory

from taskdeck.client.rpc_client import TaskRpcClient
from taskdeck.config import get_settings
from taskdeck.console.state import TaskConsole
from taskdeck.infra.logging import setup_logging
from taskdeck.ui.main_window import MainWindow


def main() -> None:
    settings = get_settings()
    setup_logging(settings, "taskdeck-console.log")

    client = TaskRpcClient(settings.api_url, timeout=settings.api_timeout)
    app = QApplication(sys.argv)
    app.setStyle(QStyleFactory.create("Fusion"))

    window = MainWindow(TaskConsole(client))
    window.show()
    code = app.exec()
    client.close()
    sys.exit(code)


if __name__ == "__main__":
    main()
