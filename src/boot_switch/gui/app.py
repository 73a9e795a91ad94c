from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QListWidget, QListWidgetItem,
    QPushButton, QMessageBox, QHBoxLayout, QTextEdit, QInputDialog
)

from boot_switch.errors import ToolExecutionError, ValidationError
from boot_switch.models import ViewEntry
from boot_switch.service import BootSwitchService


class BootSwitchApp(QWidget):
    def __init__(self, service: BootSwitchService):
        super().__init__()
        self.setWindowTitle('Boot Switch')
        self.resize(640, 480)
        self.service = service

        self._build_ui()
        self.refresh()

    def _build_ui(self):
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(f'Boot entries ({self.service.manager.list_command})'))

        self.list = QListWidget()
        layout.addWidget(self.list, 2)

        layout.addWidget(QLabel('Hidden entries'))
        self.hidden_list = QListWidget()
        layout.addWidget(self.hidden_list, 1)

        btn_row = QHBoxLayout()
        self.btn_refresh = QPushButton('Refresh')
        self.btn_rename = QPushButton('Rename...')
        self.btn_hide = QPushButton('Hide')
        self.btn_unhide = QPushButton('Unhide')
        self.btn_boot = QPushButton('Boot now')
        for b in (self.btn_refresh, self.btn_rename, self.btn_hide, self.btn_unhide, self.btn_boot):
            btn_row.addWidget(b)
        layout.addLayout(btn_row)

        layout.addWidget(QLabel('Log'))
        self.log = QTextEdit()
        self.log.setReadOnly(True)
        layout.addWidget(self.log, 1)

        self.btn_refresh.clicked.connect(self.refresh)
        self.btn_rename.clicked.connect(self.rename_selection)
        self.btn_hide.clicked.connect(lambda: self.set_hidden(self.list, True))
        self.btn_unhide.clicked.connect(lambda: self.set_hidden(self.hidden_list, False))
        self.btn_boot.clicked.connect(self.boot_selection)

    def log_line(self, text: str):
        self.log.append(text)

    def _add_item(self, widget: QListWidget, e: ViewEntry):
        item = QListWidgetItem(f"{e.display_label}  [{e.caption}]" + ("  (next)" if e.is_next else ""))
        item.setData(Qt.UserRole, e)
        widget.addItem(item)

    def _selected(self, widget: QListWidget) -> ViewEntry | None:
        item = widget.currentItem()
        return item.data(Qt.UserRole) if item else None

    def refresh(self):
        self.list.clear()
        self.hidden_list.clear()
        try:
            view = self.service.view()
        except ToolExecutionError as e:
            QMessageBox.warning(self, 'Unavailable', f'Running {e.command} failed. Run as admin/root.\n\n{e.diagnostic}')
            self.log_line('Error: ' + e.diagnostic)
            return
        for e in view.visible:
            self._add_item(self.list, e)
        for e in view.hidden:
            self._add_item(self.hidden_list, e)
        self.log_line(f'Found {len(view.visible)} entries ({len(view.hidden)} hidden)')

    def rename_selection(self):
        entry = self._selected(self.list) or self._selected(self.hidden_list)
        if entry is None:
            QMessageBox.information(self, 'Rename', 'Select an entry first')
            return
        label, ok = QInputDialog.getText(self, 'Rename', 'New name:', text=entry.display_label)
        if not ok:
            return
        try:
            self.service.rename(entry.id, label)
        except ValidationError as e:
            self.log_line(f'Not renamed: {e}')
            return
        self.refresh()

    def set_hidden(self, widget: QListWidget, hidden: bool):
        entry = self._selected(widget)
        if entry is None:
            return
        self.service.set_hidden(entry.id, hidden)
        self.refresh()

    def boot_selection(self):
        entry = self._selected(self.list)
        if entry is None:
            QMessageBox.information(self, 'Boot', 'Select an entry first')
            return
        ret = QMessageBox.question(self, 'Confirm reboot', f'Reboot into {entry.display_label} now? Save your work first.')
        if ret != QMessageBox.Yes:
            return
        outcome = self.service.boot(entry.id)
        if outcome.ok:
            self.log_line(f'Rebooting to {outcome.target_label}...')
        else:
            QMessageBox.critical(self, 'Failed', f'Failed to schedule boot to {outcome.target_label}:\n\n{outcome.diagnostic}')
            self.log_line('Error: ' + outcome.diagnostic)
