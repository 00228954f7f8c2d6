from __future__ import annotations

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QApplication,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from taskdeck.console.state import TaskConsole

from .widgets import TaskEditWidget, TaskItemWidget


class MainWindow(QWidget):
    def __init__(self, console: TaskConsole):
        super().__init__()
        self.setWindowTitle("taskdeck")
        self.resize(720, 760)

        self.console = console

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(12)
        layout.addLayout(self._build_header())
        layout.addWidget(self._build_form())
        layout.addWidget(self._build_list(), 1)

        self.footer_label = QLabel("All tasks completed!")
        self.footer_label.setAlignment(Qt.AlignCenter)
        self.footer_label.setVisible(False)
        layout.addWidget(self.footer_label)

        self._render_pending = False
        self.console.subscribe(self.schedule_render)
        self.console.load()
        self.render()

        QShortcut(QKeySequence("Ctrl+N"), self, self.title_input.setFocus)
        QShortcut(QKeySequence("F5"), self, self.console.load)

    def _build_header(self) -> QHBoxLayout:
        header = QHBoxLayout()
        title = QLabel("Tasks")
        title.setProperty("class", "panel-title")
        self.completed_label = QLabel("")
        self.completed_label.setProperty("class", "stats-badge")
        self.remaining_label = QLabel("")
        self.remaining_label.setProperty("class", "stats-badge")
        header.addWidget(title)
        header.addStretch()
        header.addWidget(self.completed_label)
        header.addWidget(self.remaining_label)
        return header

    def _build_form(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("CreatePanel")
        layout = QVBoxLayout(frame)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("What needs to be done?")
        self.title_input.textChanged.connect(self.on_form_title_changed)
        self.title_input.returnPressed.connect(self.submit_create)

        self.description_input = QTextEdit()
        self.description_input.setPlaceholderText("Add a description (optional)")
        self.description_input.setFixedHeight(72)
        self.description_input.textChanged.connect(self.on_form_description_changed)

        self.add_button = QPushButton("Add task")
        self.add_button.clicked.connect(self.submit_create)

        layout.addWidget(self.title_input)
        layout.addWidget(self.description_input)
        layout.addWidget(self.add_button)
        return frame

    def _build_list(self) -> QWidget:
        frame = QFrame()
        frame.setObjectName("CenterPanel")
        layout = QVBoxLayout(frame)
        layout.setContentsMargins(0, 0, 0, 0)

        self.empty_label = QLabel("No tasks yet. Create your first task above.")
        self.empty_label.setAlignment(Qt.AlignCenter)

        self.task_list = QListWidget()
        self.task_list.setObjectName("TaskList")
        self.task_list.setSelectionMode(QListWidget.NoSelection)
        self.task_list.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)

        layout.addWidget(self.empty_label)
        layout.addWidget(self.task_list, 1)
        return frame

    def schedule_render(self) -> None:
        # widgets of the list are rebuilt on render, never from inside their own signals
        if self._render_pending:
            return
        self._render_pending = True
        QTimer.singleShot(0, self.render)

    def render(self) -> None:
        self._render_pending = False
        counts = self.console.counts()
        self.completed_label.setText(f"{counts.completed} completed")
        self.remaining_label.setText(f"{counts.remaining} remaining")
        self.footer_label.setVisible(counts.all_done)

        self.add_button.setEnabled(self.console.can_submit())
        self.add_button.setText("Adding..." if self.console.creating else "Add task")
        if self.console.form.title != self.title_input.text():
            self.title_input.setText(self.console.form.title)
        if self.console.form.description != self.description_input.toPlainText():
            self.description_input.setPlainText(self.console.form.description)

        self._render_tasks()
        self._show_notice()

    def _render_tasks(self) -> None:
        self.task_list.clear()
        tasks = self.console.tasks
        self.empty_label.setVisible(not tasks)
        self.task_list.setVisible(bool(tasks))

        for task in tasks:
            if task.id == self.console.editing_id:
                widget = TaskEditWidget(self.console.edit, self.console.save_edit, self.console.cancel_edit)
            else:
                widget = TaskItemWidget(
                    task,
                    self.console.toggle,
                    self.console.start_edit,
                    self.confirm_delete,
                )
            item = QListWidgetItem()
            item.setData(Qt.UserRole, task.id)
            self.task_list.addItem(item)
            self.task_list.setItemWidget(item, widget)
            item.setSizeHint(widget.sizeHint())

    def _show_notice(self) -> None:
        notice = self.console.notice
        if notice is None:
            return
        self.console.dismiss_notice()
        QMessageBox.warning(self, "Error", notice.message)

    def on_form_title_changed(self, text: str) -> None:
        self.console.form.title = text
        self.add_button.setEnabled(self.console.can_submit())

    def on_form_description_changed(self) -> None:
        self.console.form.description = self.description_input.toPlainText()

    def submit_create(self) -> None:
        if not self.console.can_submit():
            return
        self.add_button.setEnabled(False)
        QApplication.processEvents()
        self.console.submit_create()

    def confirm_delete(self, task_id: int) -> None:
        confirm = QMessageBox.question(
            self,
            "Confirm",
            "Delete this task?",
        )
        if confirm != QMessageBox.Yes:
            return
        self.console.delete(task_id)
