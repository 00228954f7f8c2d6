from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSizePolicy,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from taskdeck.console.state import Draft
from taskdeck.domain.entities import TaskEntity


class TaskItemWidget(QWidget):
    def __init__(self, task: TaskEntity, on_toggle, on_edit, on_delete, parent=None):
        super().__init__(parent)
        self.task = task
        self._on_toggle = on_toggle
        self._on_edit = on_edit
        self._on_delete = on_delete

        self.setObjectName("TaskCard")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(8)

        self.done_check = QCheckBox()
        self.done_check.setChecked(task.completed)
        self.done_check.clicked.connect(self._handle_toggle)

        text_layout = QVBoxLayout()
        text_layout.setSpacing(4)

        title = QLabel(task.title)
        title.setProperty("class", "task-title")
        title.setProperty("completed", task.completed)
        title.setWordWrap(True)
        text_layout.addWidget(title)

        if task.description:
            description = QLabel(task.description)
            description.setProperty("class", "task-meta")
            description.setWordWrap(True)
            text_layout.addWidget(description)

        status = "Done" if task.completed else "Pending"
        meta = QLabel(f"{status} | Created {task.created_at.strftime('%d.%m.%Y %H:%M')}")
        meta.setProperty("class", "task-meta")
        text_layout.addWidget(meta)

        self.edit_button = QPushButton("Edit")
        self.edit_button.setProperty("variant", "secondary")
        self.edit_button.clicked.connect(lambda: self._on_edit(self.task.id))

        self.delete_button = QPushButton("Delete")
        self.delete_button.setProperty("variant", "ghost")
        self.delete_button.clicked.connect(lambda: self._on_delete(self.task.id))

        layout.addWidget(self.done_check, 0, Qt.AlignTop)
        layout.addLayout(text_layout, 1)
        layout.addWidget(self.edit_button, 0, Qt.AlignTop)
        layout.addWidget(self.delete_button, 0, Qt.AlignTop)

    def _handle_toggle(self) -> None:
        # the checkbox mirrors the store, not the click
        self.done_check.setChecked(self.task.completed)
        self._on_toggle(self.task.id)


class TaskEditWidget(QWidget):
    def __init__(self, draft: Draft, on_save, on_cancel, parent=None):
        super().__init__(parent)
        self._draft = draft

        self.setObjectName("TaskCard")
        self.setAttribute(Qt.WA_StyledBackground, True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(6)

        self.title_input = QLineEdit(draft.title)
        self.title_input.textChanged.connect(self._on_title_changed)
        self.title_input.returnPressed.connect(on_save)

        self.description_input = QTextEdit()
        self.description_input.setPlainText(draft.description)
        self.description_input.setFixedHeight(60)
        self.description_input.textChanged.connect(self._on_description_changed)

        self.save_button = QPushButton("Save")
        self.save_button.clicked.connect(on_save)
        self.save_button.setEnabled(bool(draft.title.strip()))

        cancel_button = QPushButton("Cancel")
        cancel_button.setProperty("variant", "ghost")
        cancel_button.clicked.connect(on_cancel)

        buttons = QHBoxLayout()
        buttons.addWidget(self.save_button)
        buttons.addWidget(cancel_button)
        buttons.addStretch()

        layout.addWidget(self.title_input)
        layout.addWidget(self.description_input)
        layout.addLayout(buttons)

    def _on_title_changed(self, text: str) -> None:
        self._draft.title = text
        self.save_button.setEnabled(bool(text.strip()))

    def _on_description_changed(self) -> None:
        self._draft.description = self.description_input.toPlainText()
